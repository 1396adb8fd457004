"""Spatial subpackage — great-circle distance and map projection."""

from mrt_tracker.spatial.distance import EARTH_RADIUS_KM, haversine_km, haversine_km_many
from mrt_tracker.spatial.transform import (
    BoundingRectangle,
    MarkerPosition,
    compute_bounding_rectangle,
    project,
)

__all__ = [
    "EARTH_RADIUS_KM",
    "BoundingRectangle",
    "MarkerPosition",
    "compute_bounding_rectangle",
    "haversine_km",
    "haversine_km_many",
    "project",
]
