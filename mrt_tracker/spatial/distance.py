"""
Great-circle distance
=====================
Haversine distance between WGS 84 coordinates on a spherical Earth.

    a = sin²(Δφ/2) + cos φ1 · cos φ2 · sin²(Δλ/2)
    d = 2 R · asin(√a)

``a`` is clamped to [0, 1] before the square root: floating-point
rounding can push it just past 1 for near-antipodal pairs, which would
make ``asin`` raise a domain error.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from mrt_tracker.models.point import Coordinate, Point

EARTH_RADIUS_KM = 6371.0


def _clamp_unit(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def haversine_km(a: Coordinate | Point, b: Coordinate | Point) -> float:
    """Great-circle distance in kilometres between two coordinates."""
    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    d_phi = phi2 - phi1
    d_lambda = math.radians(b.long - a.long)

    h = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(_clamp_unit(h)))


def haversine_km_many(
    origin: Coordinate | Point,
    points: Sequence[Coordinate | Point],
) -> np.ndarray:
    """
    Vectorised haversine from *origin* to every entry of *points*.

    Returns a float64 array aligned with *points* (empty for no points).
    """
    if not points:
        return np.empty(0, dtype=np.float64)

    lats = np.radians(np.fromiter((p.lat for p in points), dtype=np.float64))
    longs = np.fromiter((p.long for p in points), dtype=np.float64)

    phi1 = math.radians(origin.lat)
    d_phi = lats - phi1
    d_lambda = np.radians(longs - origin.long)

    h = np.sin(d_phi / 2) ** 2 + math.cos(phi1) * np.cos(lats) * np.sin(d_lambda / 2) ** 2
    return 2 * EARTH_RADIUS_KM * np.arcsin(np.sqrt(np.clip(h, 0.0, 1.0)))
