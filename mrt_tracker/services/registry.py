"""
Station Registry
================
An ordered, immutable list of stations together with the bounding
rectangle derived from it.

The rectangle is computed once, when the registry is built, and handed
to the projector from there.  Nothing is computed at import time and
there is no process-wide registry: whoever needs one builds it with
``load_registry()`` (or ``PointRegistry(points)``) and passes it along.
"""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path
from typing import Iterable, Iterator, Sequence, overload

from pydantic import ValidationError

from mrt_tracker.exceptions import DuplicatePointError, EmptyRegistryError, RegistryLoadError
from mrt_tracker.models.point import Coordinate, Point
from mrt_tracker.schemas.station import StationFile
from mrt_tracker.services.resolver import ClosestMatch, find_closest_match, rank_by_distance
from mrt_tracker.spatial.transform import (
    BoundingRectangle,
    MarkerPosition,
    compute_bounding_rectangle,
    project,
)

logger = logging.getLogger(__name__)

BUNDLED_STATIONS = "stations.json"


class PointRegistry(Sequence[Point]):
    """
    Read-only station list with memoised map bounds.

    Iteration order is declaration order; the resolver relies on it to
    break distance ties.

    Raises
    ------
    EmptyRegistryError
        If *points* is empty.
    DuplicatePointError
        If two points share an ``id``.
    """

    def __init__(self, points: Iterable[Point]) -> None:
        self._points: tuple[Point, ...] = tuple(points)
        if not self._points:
            raise EmptyRegistryError()

        by_id: dict[str, Point] = {}
        for p in self._points:
            if p.id in by_id:
                raise DuplicatePointError(p.id)
            by_id[p.id] = p
        self._by_id = by_id

        self._bounds = compute_bounding_rectangle(self._points)

    # ── Sequence protocol ────────────────────────────────────

    @overload
    def __getitem__(self, index: int) -> Point: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Point, ...]: ...

    def __getitem__(self, index):
        return self._points[index]

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __repr__(self) -> str:
        return f"PointRegistry({len(self._points)} points)"

    # ── Accessors ────────────────────────────────────────────

    @property
    def points(self) -> tuple[Point, ...]:
        return self._points

    @property
    def bounds(self) -> BoundingRectangle:
        return self._bounds

    def get(self, point_id: str) -> Point | None:
        return self._by_id.get(point_id)

    # ── Queries ──────────────────────────────────────────────

    def find_closest(self, query: Coordinate) -> Point:
        return find_closest_match(query, self._points).point

    def find_closest_match(self, query: Coordinate) -> ClosestMatch:
        return find_closest_match(query, self._points)

    def rank(self, query: Coordinate, limit: int | None = None) -> list[ClosestMatch]:
        return rank_by_distance(query, self._points, limit)

    def project(self, coord: Coordinate | Point) -> MarkerPosition:
        return project(coord, self._bounds)


# ── Loading ──────────────────────────────────────────────────────

def parse_registry(raw: str | bytes, source: str = "<string>") -> PointRegistry:
    """
    Build a registry from JSON text of the form
    ``{"stations": [{"id", "name", "lat", "long"}, ...]}``.
    """
    try:
        parsed = StationFile.model_validate_json(raw)
    except ValidationError as exc:
        raise RegistryLoadError(source, str(exc)) from exc

    return PointRegistry(
        Point(id=s.id, name=s.name, lat=s.lat, long=s.long)
        for s in parsed.stations
    )


def load_registry(path: str | Path | None = None) -> PointRegistry:
    """
    Load a station registry from *path*, or the bundled MRT/LRT list.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    RegistryLoadError
        If the file is not valid JSON or fails schema validation.
    """
    if path is None:
        source = f"bundled {BUNDLED_STATIONS}"
        raw = resources.files("mrt_tracker.data").joinpath(BUNDLED_STATIONS).read_bytes()
    else:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Station file not found: {path}")
        source = str(path)
        raw = path.read_bytes()

    registry = parse_registry(raw, source)
    logger.info(
        "Loaded %d stations from %s (bounds lat %.5f..%.5f, long %.5f..%.5f)",
        len(registry),
        source,
        registry.bounds.min_lat,
        registry.bounds.max_lat,
        registry.bounds.min_long,
        registry.bounds.max_long,
    )
    return registry
