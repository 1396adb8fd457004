"""
Shared fixtures for the MRT Tracker test suite.

This conftest provides:
- Point factories
- The two-station Alpha/Beta registry used across resolver, projection
  and tracker tests
- A fixed clock for position-feed tests
"""
from __future__ import annotations

from datetime import datetime, timezone

import pytest

from mrt_tracker.models.point import Point
from mrt_tracker.services.registry import PointRegistry


# ---------------------------------------------------------------------------
# Sample data factories
# ---------------------------------------------------------------------------
FIXED_NOW = datetime(2025, 1, 1, 8, 0, 0, tzinfo=timezone.utc)

ALPHA = Point(id="A", name="Alpha", lat=1.3000, long=103.8000)
BETA = Point(id="B", name="Beta", lat=1.4000, long=103.9000)


def make_point(
    *,
    id: str = "P1",
    name: str = "Sample",
    lat: float = 1.35,
    long: float = 103.85,
) -> Point:
    """Return a Point with overridable defaults."""
    return Point(id=id, name=name, lat=lat, long=long)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def alpha_beta() -> list[Point]:
    return [ALPHA, BETA]


@pytest.fixture()
def alpha_beta_registry(alpha_beta) -> PointRegistry:
    return PointRegistry(alpha_beta)


@pytest.fixture()
def fixed_clock():
    return lambda: FIXED_NOW
