"""Exceptions raised by the station registry, resolver and tracker."""

from __future__ import annotations


class TrackerError(Exception):
    """Base class for all MRT Tracker errors."""


class EmptyRegistryError(TrackerError):
    """A search or reduction was asked to run over zero points."""

    def __init__(self, message: str = "Point registry is empty") -> None:
        super().__init__(message)


class DuplicatePointError(TrackerError):
    """Two registry entries share the same ``id``."""

    def __init__(self, point_id: str) -> None:
        self.point_id = point_id
        super().__init__(f"Duplicate point id in registry: {point_id!r}")


class InvalidCoordinateError(TrackerError, ValueError):
    """Latitude or longitude outside its valid range."""

    def __init__(self, lat: float, long: float) -> None:
        self.lat = lat
        self.long = long
        super().__init__(
            f"Invalid coordinate (lat={lat}, long={long}): latitude must be "
            "within [-90, 90] and longitude within [-180, 180]"
        )


class RegistryLoadError(TrackerError):
    """A station file could not be parsed or failed schema validation."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Could not load station registry from {source}: {reason}")
