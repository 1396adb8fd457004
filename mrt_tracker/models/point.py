"""
Value types for stations and queried locations.

All coordinates are WGS 84 decimal degrees.  Longitude is spelled
``long`` throughout to match the station data files.
"""

from __future__ import annotations

from dataclasses import dataclass

from mrt_tracker.exceptions import InvalidCoordinateError


# ── Coordinate ───────────────────────────────────────────────────
@dataclass(frozen=True, slots=True)
class Coordinate:
    """A latitude/longitude pair (device position or a station's location)."""

    lat: float
    long: float


# ── Point ────────────────────────────────────────────────────────
@dataclass(frozen=True, slots=True)
class Point:
    """A named station in the registry."""

    id: str
    name: str
    lat: float
    long: float

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(lat=self.lat, long=self.long)

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"


def is_valid_coordinate(lat: float, long: float) -> bool:
    return -90.0 <= lat <= 90.0 and -180.0 <= long <= 180.0


def validate_coordinate(coord: Coordinate) -> Coordinate:
    """
    Return *coord* unchanged if it lies within the valid lat/long ranges.

    Raises
    ------
    InvalidCoordinateError
        If latitude is outside [-90, 90] or longitude outside [-180, 180].
        NaN fails both range checks and is rejected too.
    """
    if not is_valid_coordinate(coord.lat, coord.long):
        raise InvalidCoordinateError(coord.lat, coord.long)
    return coord
