"""
Pydantic schemas for station files and tracker snapshots.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


# ═══════════════════════════════════════════════════════════════════
# Station file schemas
# ═══════════════════════════════════════════════════════════════════
class StationIn(BaseModel):
    """One station entry as stored in a JSON station file."""

    id: str = Field(min_length=1, description="Station code, e.g. NS9")
    name: str = Field(min_length=1)
    lat: float = Field(ge=-90, le=90, description="Latitude, decimal degrees")
    long: float = Field(ge=-180, le=180, description="Longitude, decimal degrees")

    @field_validator("id", "name")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class StationFile(BaseModel):
    stations: list[StationIn] = Field(min_length=1)


# ═══════════════════════════════════════════════════════════════════
# Tracker snapshot schemas
# ═══════════════════════════════════════════════════════════════════
class CoordinateOut(BaseModel):
    lat: float
    long: float


class StationOut(BaseModel):
    id: str
    name: str
    lat: float
    long: float

    model_config = {"from_attributes": True}


class MarkerOut(BaseModel):
    """Marker placement over the map image."""

    x: float = Field(ge=0, le=100, description="Percent from the left edge")
    y: float = Field(ge=0, le=100, description="Percent from the top edge")

    model_config = {"from_attributes": True}


class TrackerSnapshot(BaseModel):
    """Serializable view of one tracker state."""

    tracking: bool
    status: str
    position: CoordinateOut | None = None
    closest_station: StationOut | None = None
    distance_km: float | None = None
    position_marker: MarkerOut | None = None
    closest_station_marker: MarkerOut | None = None
    error: str | None = None
