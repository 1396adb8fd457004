"""
Nearest-Station Resolver
========================
Linear great-circle search over a small static station list.

Ties resolve to the first station in registry order: a candidate must be
strictly closer than the current best to replace it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from mrt_tracker.exceptions import EmptyRegistryError
from mrt_tracker.models.point import Coordinate, Point
from mrt_tracker.spatial.distance import haversine_km, haversine_km_many


@dataclass(frozen=True, slots=True)
class ClosestMatch:
    point: Point
    distance_km: float


def find_closest_match(query: Coordinate, registry: Sequence[Point]) -> ClosestMatch:
    """
    Return the registry point nearest to *query* with its distance.

    Raises
    ------
    EmptyRegistryError
        If *registry* holds no points.
    """
    best: ClosestMatch | None = None
    for point in registry:
        distance = haversine_km(query, point)
        if best is None or distance < best.distance_km:
            best = ClosestMatch(point=point, distance_km=distance)

    if best is None:
        raise EmptyRegistryError("Cannot find the closest point in an empty registry")
    return best


def find_closest(query: Coordinate, registry: Sequence[Point]) -> Point:
    """Return the registry point nearest to *query* by great-circle distance."""
    return find_closest_match(query, registry).point


def rank_by_distance(
    query: Coordinate,
    registry: Sequence[Point],
    limit: int | None = None,
) -> list[ClosestMatch]:
    """
    All registry points ordered nearest-first.

    The sort is stable, so equidistant points keep registry order and the
    head of the list always agrees with ``find_closest``.

    Raises
    ------
    EmptyRegistryError
        If *registry* holds no points.
    """
    if not registry:
        raise EmptyRegistryError("Cannot rank points of an empty registry")
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")

    distances = haversine_km_many(query, registry)
    order = np.argsort(distances, kind="stable")
    if limit is not None:
        order = order[:limit]

    return [
        ClosestMatch(point=registry[int(i)], distance_km=float(distances[i]))
        for i in order
    ]
