"""Schemas subpackage — Pydantic models for station files and snapshots."""

from mrt_tracker.schemas.station import (
    CoordinateOut,
    MarkerOut,
    StationFile,
    StationIn,
    StationOut,
    TrackerSnapshot,
)

__all__ = [
    "CoordinateOut",
    "MarkerOut",
    "StationFile",
    "StationIn",
    "StationOut",
    "TrackerSnapshot",
]
