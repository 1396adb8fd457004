"""Models subpackage."""

from mrt_tracker.models.point import Coordinate, Point, is_valid_coordinate, validate_coordinate

__all__ = [
    "Coordinate",
    "Point",
    "is_valid_coordinate",
    "validate_coordinate",
]
