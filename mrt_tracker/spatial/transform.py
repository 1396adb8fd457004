"""
Map Projection
==============
Places geographic coordinates on a static map image using the linear
min/max rectangle of the station registry:

1. **Geographic**  — WGS 84 latitude / longitude.
2. **Percentage**  — 0–100 on each axis of the map image, x to the
                     right (east) and y downward (south).
3. **Pixel**       — offsets on a concrete image of a given size.

The relationship for a non-degenerate rectangle:

    x% = (long − min_long) / (max_long − min_long) × 100
    y% = (max_lat − lat)   / (max_lat − min_lat)   × 100

Results are clamped to [0, 100], so a position outside the mapped area
is pinned to the nearest edge rather than rejected.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from shapely.geometry import Polygon, box

from mrt_tracker.exceptions import EmptyRegistryError
from mrt_tracker.models.point import Coordinate, Point

CENTER_PERCENT = 50.0


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


# ── Bounding rectangle (map extent) ──────────────────────────────
@dataclass(frozen=True, slots=True)
class BoundingRectangle:
    """The lat/long envelope of a station registry."""

    min_lat: float
    max_lat: float
    min_long: float
    max_long: float

    @property
    def lat_range(self) -> float:
        return self.max_lat - self.min_lat

    @property
    def long_range(self) -> float:
        return self.max_long - self.min_long

    @property
    def is_degenerate(self) -> bool:
        """True for a single-point or collinear (zero-span) registry."""
        return self.lat_range == 0 or self.long_range == 0

    @property
    def center(self) -> Coordinate:
        return Coordinate(
            lat=(self.min_lat + self.max_lat) / 2,
            long=(self.min_long + self.max_long) / 2,
        )

    def contains(self, coord: Coordinate | Point) -> bool:
        return (
            self.min_lat <= coord.lat <= self.max_lat
            and self.min_long <= coord.long <= self.max_long
        )

    def to_shapely(self) -> Polygon:
        """Return a Shapely box in (long, lat) axis order."""
        return box(self.min_long, self.min_lat, self.max_long, self.max_lat)

    def to_wkt(self) -> str:
        return self.to_shapely().wkt


def compute_bounding_rectangle(points: Iterable[Point | Coordinate]) -> BoundingRectangle:
    """
    Min/max reduction over every point's ``lat`` and ``long``.

    Raises
    ------
    EmptyRegistryError
        If *points* yields nothing; there is no meaningful extent.
    """
    iterator = iter(points)
    try:
        first = next(iterator)
    except StopIteration:
        raise EmptyRegistryError("Cannot compute bounds of an empty registry") from None

    min_lat = max_lat = first.lat
    min_long = max_long = first.long
    for p in iterator:
        min_lat = min(min_lat, p.lat)
        max_lat = max(max_lat, p.lat)
        min_long = min(min_long, p.long)
        max_long = max(max_long, p.long)

    return BoundingRectangle(
        min_lat=min_lat,
        max_lat=max_lat,
        min_long=min_long,
        max_long=max_long,
    )


# ── Marker position (percentage space) ───────────────────────────
@dataclass(frozen=True, slots=True)
class MarkerPosition:
    """Marker placement as percentages of the map image."""

    x: float
    y: float

    def to_pixels(self, width: float, height: float) -> tuple[float, float]:
        """Convert to pixel offsets on an image of *width* × *height*."""
        return self.x / 100 * width, self.y / 100 * height


def project(coord: Coordinate | Point, bounds: BoundingRectangle) -> MarkerPosition:
    """
    Map a coordinate into percentage space over *bounds*.

    A degenerate rectangle (zero latitude or longitude span) puts every
    coordinate at the centre, ``(50, 50)``.
    """
    lat_range = bounds.lat_range
    long_range = bounds.long_range
    if lat_range == 0 or long_range == 0:
        return MarkerPosition(CENTER_PERCENT, CENTER_PERCENT)

    x_percent = (coord.long - bounds.min_long) / long_range * 100
    y_percent = (bounds.max_lat - coord.lat) / lat_range * 100

    return MarkerPosition(
        x=clamp(x_percent, 0.0, 100.0),
        y=clamp(y_percent, 0.0, 100.0),
    )
