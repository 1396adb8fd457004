"""MRT Tracker — nearest-station lookup and map marker placement."""

from mrt_tracker.exceptions import (
    DuplicatePointError,
    EmptyRegistryError,
    InvalidCoordinateError,
    RegistryLoadError,
    TrackerError,
)
from mrt_tracker.models.point import Coordinate, Point
from mrt_tracker.services.registry import PointRegistry, load_registry
from mrt_tracker.services.resolver import find_closest
from mrt_tracker.spatial.transform import (
    BoundingRectangle,
    MarkerPosition,
    compute_bounding_rectangle,
    project,
)

__version__ = "0.1.0"

__all__ = [
    "BoundingRectangle",
    "Coordinate",
    "DuplicatePointError",
    "EmptyRegistryError",
    "InvalidCoordinateError",
    "MarkerPosition",
    "Point",
    "PointRegistry",
    "RegistryLoadError",
    "TrackerError",
    "compute_bounding_rectangle",
    "find_closest",
    "load_registry",
    "project",
]
