"""Services subpackage — station lookup, position feeds and tracking."""

from mrt_tracker.services.feed import (
    FeedOptions,
    PositionError,
    PositionErrorCode,
    PositionFeed,
    PositionSubscription,
    PositionUpdate,
    QueuePositionFeed,
    UnavailablePositionFeed,
)
from mrt_tracker.services.registry import PointRegistry, load_registry, parse_registry
from mrt_tracker.services.resolver import (
    ClosestMatch,
    find_closest,
    find_closest_match,
    rank_by_distance,
)
from mrt_tracker.services.tracker import LocationTracker, TrackerState

__all__ = [
    "ClosestMatch",
    "FeedOptions",
    "LocationTracker",
    "PointRegistry",
    "PositionError",
    "PositionErrorCode",
    "PositionFeed",
    "PositionSubscription",
    "PositionUpdate",
    "QueuePositionFeed",
    "TrackerState",
    "UnavailablePositionFeed",
    "find_closest",
    "find_closest_match",
    "load_registry",
    "parse_registry",
    "rank_by_distance",
]
