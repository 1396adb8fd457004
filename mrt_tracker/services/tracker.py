"""
Location Tracker
================
Turns a stream of position events into display states: where the user
is, which station is nearest, and where both markers sit on the map.

``LocationTracker.apply`` is a pure reducer over ``TrackerState``;
``LocationTracker.track`` drives it from a live ``PositionFeed`` and
always clears its watch on exit.
"""

from __future__ import annotations

import logging
from contextlib import aclosing
from dataclasses import dataclass, replace
from typing import AsyncIterator

from mrt_tracker.exceptions import InvalidCoordinateError
from mrt_tracker.models.point import Coordinate, Point, validate_coordinate
from mrt_tracker.schemas.station import (
    CoordinateOut,
    MarkerOut,
    StationOut,
    TrackerSnapshot,
)
from mrt_tracker.services.feed import (
    UNAVAILABLE_MESSAGE,
    FeedOptions,
    PositionError,
    PositionEvent,
    PositionFeed,
    PositionSubscription,
    PositionUpdate,
)
from mrt_tracker.services.registry import PointRegistry
from mrt_tracker.spatial.transform import MarkerPosition

logger = logging.getLogger(__name__)

STATUS_TRACKING = "Tracking your live position."
STATUS_WAITING = "Waiting for location permissions or GPS lock..."


@dataclass(frozen=True, slots=True)
class TrackerState:
    position: Coordinate | None = None
    closest: Point | None = None
    distance_km: float | None = None
    position_marker: MarkerPosition | None = None
    closest_marker: MarkerPosition | None = None
    error: str | None = None

    @property
    def tracking(self) -> bool:
        return self.position is not None

    @property
    def status_message(self) -> str:
        return STATUS_TRACKING if self.tracking else STATUS_WAITING

    def details(self) -> list[str]:
        """Human-readable lines for a location-details panel."""
        lines = []
        if self.error:
            lines.append(self.error)
        lines.append(self.status_message)
        if self.position is not None:
            lines.append(
                f"Current coordinates: {self.position.lat:.5f}, {self.position.long:.5f}"
            )
        if self.closest is not None:
            lines.append(f"Closest station: {self.closest.name} ({self.closest.id})")
        return lines

    def to_snapshot(self) -> TrackerSnapshot:
        return TrackerSnapshot(
            tracking=self.tracking,
            status=self.status_message,
            position=(
                CoordinateOut(lat=self.position.lat, long=self.position.long)
                if self.position is not None
                else None
            ),
            closest_station=(
                StationOut.model_validate(self.closest) if self.closest is not None else None
            ),
            distance_km=self.distance_km,
            position_marker=(
                MarkerOut.model_validate(self.position_marker)
                if self.position_marker is not None
                else None
            ),
            closest_station_marker=(
                MarkerOut.model_validate(self.closest_marker)
                if self.closest_marker is not None
                else None
            ),
            error=self.error,
        )


class LocationTracker:
    """
    Resolves the nearest station for each incoming position.

    Parameters
    ----------
    registry : PointRegistry
        Stations to search; its bounds define the map projection.
    validate_positions : bool
        Reject out-of-range coordinates as an error state instead of
        resolving them.
    """

    def __init__(self, registry: PointRegistry, *, validate_positions: bool = False) -> None:
        self.registry = registry
        self.validate_positions = validate_positions

    def locate(self, position: Coordinate) -> TrackerState:
        """State for a single fix, with no prior history."""
        return self.apply(TrackerState(), PositionUpdate(coordinate=position))

    def apply(self, state: TrackerState, event: PositionEvent) -> TrackerState:
        if isinstance(event, PositionError):
            logger.warning("Position error (%s): %s", event.code.value, event.message)
            return replace(state, error=event.message)

        position = event.coordinate
        if self.validate_positions:
            try:
                validate_coordinate(position)
            except InvalidCoordinateError as exc:
                logger.warning("Rejected position: %s", exc)
                return replace(state, error=str(exc))

        match = self.registry.find_closest_match(position)
        logger.debug(
            "Position %.5f, %.5f -> %s (%.3f km)",
            position.lat,
            position.long,
            match.point,
            match.distance_km,
        )
        return TrackerState(
            position=position,
            closest=match.point,
            distance_km=match.distance_km,
            position_marker=self.registry.project(position),
            closest_marker=self.registry.project(match.point),
            error=None,
        )

    async def track(
        self,
        feed: PositionFeed,
        options: FeedOptions | None = None,
    ) -> AsyncIterator[TrackerState]:
        """Yield a new state for every event the feed produces."""
        state = TrackerState()
        if not feed.available:
            yield replace(state, error=UNAVAILABLE_MESSAGE)
            return

        subscription = feed.subscribe(options)
        async with subscription, aclosing(self.follow(subscription)) as states:
            async for state in states:
                yield state

    async def follow(self, subscription: PositionSubscription) -> AsyncIterator[TrackerState]:
        """Like ``track`` but over a subscription the caller already opened."""
        state = TrackerState()
        try:
            async for event in subscription:
                state = self.apply(state, event)
                yield state
        finally:
            subscription.close()
