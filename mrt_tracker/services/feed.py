"""
Position Feed
=============
A stream of device positions modelled as a cancellable subscription.

A ``PositionFeed`` hands out ``PositionSubscription`` objects.  Each
subscription is an async iterator of events:

- ``PositionUpdate`` — a new fix (coordinate + timestamp).
- ``PositionError``  — permission denied, position unavailable, or a
  watch timeout.  Errors do not end the subscription.

Iteration stops only after ``close()``, which is also called on exit
from ``async with``.  Events already queued at that point are still
delivered.

Watch options
-------------
``maximum_age_s``  Updates whose timestamp is older than this are dropped.
``timeout_s``      If nothing arrives within this window, a ``TIMEOUT``
                   error is emitted and the watch keeps going.
"""

from __future__ import annotations

import abc
import asyncio
import enum
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Union

from mrt_tracker.config import Settings, get_settings
from mrt_tracker.models.point import Coordinate

logger = logging.getLogger(__name__)


# No location source at all (the device has no GPS or it is switched off).
UNAVAILABLE_MESSAGE = "Geolocation is not available on this device."


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ── Events ───────────────────────────────────────────────────────
class PositionErrorCode(str, enum.Enum):
    PERMISSION_DENIED = "PERMISSION_DENIED"
    POSITION_UNAVAILABLE = "POSITION_UNAVAILABLE"
    TIMEOUT = "TIMEOUT"
    UNSUPPORTED = "UNSUPPORTED"


@dataclass(frozen=True, slots=True)
class PositionUpdate:
    coordinate: Coordinate
    timestamp: datetime = field(default_factory=_utcnow)
    accuracy_m: float | None = None


@dataclass(frozen=True, slots=True)
class PositionError:
    code: PositionErrorCode
    message: str


PositionEvent = Union[PositionUpdate, PositionError]


# ── Options ──────────────────────────────────────────────────────
@dataclass(frozen=True, slots=True)
class FeedOptions:
    enable_high_accuracy: bool = True
    maximum_age_s: float | None = 10.0
    timeout_s: float | None = 10.0

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> FeedOptions:
        s = settings or get_settings()
        return cls(
            enable_high_accuracy=s.enable_high_accuracy,
            maximum_age_s=s.maximum_age_s,
            timeout_s=s.timeout_s,
        )


# ── Subscription ─────────────────────────────────────────────────
_CLOSED = object()


class PositionSubscription:
    """
    One active watch on a feed.

    Producers call ``push()``; consumers iterate with ``async for``.
    ``close()`` unsubscribes from the owning feed and ends iteration once
    the events already queued have been consumed.
    """

    def __init__(
        self,
        options: FeedOptions | None = None,
        *,
        on_close: Callable[[PositionSubscription], None] | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.options = options or FeedOptions()
        self._queue: asyncio.Queue = asyncio.Queue()
        self._on_close = on_close
        self._clock = clock
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, event: PositionEvent) -> None:
        if self._closed:
            logger.debug("Dropping %s pushed to a closed subscription", type(event).__name__)
            return
        self._queue.put_nowait(event)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_CLOSED)
        if self._on_close is not None:
            self._on_close(self)

    def _is_stale(self, update: PositionUpdate) -> bool:
        max_age = self.options.maximum_age_s
        if max_age is None:
            return False
        age = (self._clock() - update.timestamp).total_seconds()
        return age > max_age

    # ── Async iteration ──────────────────────────────────────

    def __aiter__(self) -> PositionSubscription:
        return self

    async def __anext__(self) -> PositionEvent:
        while True:
            if self._closed and self._queue.empty():
                raise StopAsyncIteration
            try:
                event = await asyncio.wait_for(
                    self._queue.get(), timeout=self.options.timeout_s
                )
            except asyncio.TimeoutError:
                return PositionError(
                    PositionErrorCode.TIMEOUT,
                    f"No position received within {self.options.timeout_s:g}s",
                )

            if event is _CLOSED:
                raise StopAsyncIteration
            if isinstance(event, PositionUpdate) and self._is_stale(event):
                logger.debug("Discarding stale position from %s", event.timestamp.isoformat())
                continue
            return event

    # ── Context manager ──────────────────────────────────────

    async def __aenter__(self) -> PositionSubscription:
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.close()


# ── Feeds ────────────────────────────────────────────────────────
class PositionFeed(abc.ABC):
    """Source of device positions."""

    @property
    def available(self) -> bool:
        return True

    @abc.abstractmethod
    def subscribe(self, options: FeedOptions | None = None) -> PositionSubscription:
        """Start watching; the caller must ``close()`` the subscription."""


class QueuePositionFeed(PositionFeed):
    """
    Push-based feed: whatever reads the GPS (a serial reader, a test,
    stdin) calls ``publish()`` and every open subscription receives it.
    """

    def __init__(self, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._subscriptions: list[PositionSubscription] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, options: FeedOptions | None = None) -> PositionSubscription:
        sub = PositionSubscription(options, on_close=self._unsubscribe, clock=self._clock)
        self._subscriptions.append(sub)
        logger.debug("Position watch started (%d active)", len(self._subscriptions))
        return sub

    def _unsubscribe(self, sub: PositionSubscription) -> None:
        if sub in self._subscriptions:
            self._subscriptions.remove(sub)
            logger.debug("Position watch cleared (%d active)", len(self._subscriptions))

    def publish(self, event: PositionEvent) -> None:
        for sub in list(self._subscriptions):
            sub.push(event)

    def publish_coordinate(self, lat: float, long: float, accuracy_m: float | None = None) -> None:
        self.publish(
            PositionUpdate(
                coordinate=Coordinate(lat=lat, long=long),
                timestamp=self._clock(),
                accuracy_m=accuracy_m,
            )
        )

    def close(self) -> None:
        """End every open subscription."""
        for sub in list(self._subscriptions):
            sub.close()


class UnavailablePositionFeed(PositionFeed):
    """Stands in for a device without any location source."""

    @property
    def available(self) -> bool:
        return False

    def subscribe(self, options: FeedOptions | None = None) -> PositionSubscription:
        sub = PositionSubscription(options)
        sub.push(PositionError(PositionErrorCode.UNSUPPORTED, UNAVAILABLE_MESSAGE))
        sub.close()
        return sub
