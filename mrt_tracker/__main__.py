"""
MRT Tracker — command line entry point.

One-shot lookup::

    python -m mrt_tracker --lat 1.432893 --long 103.787384

Follow a stream of ``lat,long`` lines on stdin (e.g. piped from a GPS
reader)::

    gpspipe ... | python -m mrt_tracker --follow
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import threading

from mrt_tracker.config import get_settings
from mrt_tracker.exceptions import TrackerError
from mrt_tracker.models.point import Coordinate
from mrt_tracker.services.feed import (
    FeedOptions,
    PositionError,
    PositionErrorCode,
    QueuePositionFeed,
)
from mrt_tracker.services.registry import load_registry
from mrt_tracker.services.tracker import LocationTracker, TrackerState

logger = logging.getLogger("mrt_tracker")

# Demo position near Woodlands, Singapore.
DEFAULT_LAT = 1.432893
DEFAULT_LONG = 103.787384


def parse_line(line: str) -> Coordinate:
    """Parse ``"lat,long"`` (commas or whitespace) into a Coordinate."""
    parts = line.replace(",", " ").split()
    if len(parts) != 2:
        raise ValueError(f"expected 'lat,long', got {line.strip()!r}")
    return Coordinate(lat=float(parts[0]), long=float(parts[1]))


def _print_state(state: TrackerState, as_json: bool) -> None:
    if as_json:
        print(state.to_snapshot().model_dump_json())
    else:
        for line in state.details():
            print(line)
        if state.position_marker is not None and state.closest_marker is not None:
            print(
                f"Markers: you ({state.position_marker.x:.1f}%, {state.position_marker.y:.1f}%)"
                f"  station ({state.closest_marker.x:.1f}%, {state.closest_marker.y:.1f}%)"
            )
    sys.stdout.flush()


def _read_stdin(loop: asyncio.AbstractEventLoop, feed: QueuePositionFeed) -> None:
    """
    Blocking stdin reader for a daemon thread.

    Every event is handed to the loop with ``call_soon_threadsafe``; the
    feed itself is only touched from the loop thread.  If the loop has
    already shut down the reader just stops.
    """
    try:
        for line in iter(sys.stdin.readline, ""):
            if not line.strip():
                continue
            try:
                coord = parse_line(line)
            except ValueError as exc:
                error = PositionError(PositionErrorCode.POSITION_UNAVAILABLE, str(exc))
                loop.call_soon_threadsafe(feed.publish, error)
                continue
            loop.call_soon_threadsafe(feed.publish_coordinate, coord.lat, coord.long)
        loop.call_soon_threadsafe(feed.close)
    except RuntimeError:
        logger.debug("Event loop closed, stdin reader exiting")


async def _follow_stdin(tracker: LocationTracker, options: FeedOptions, as_json: bool) -> None:
    feed = QueuePositionFeed()
    loop = asyncio.get_running_loop()

    async with feed.subscribe(options) as subscription:
        # A daemon thread stuck in readline() cannot hold up interpreter exit.
        reader = threading.Thread(
            target=_read_stdin, args=(loop, feed), name="stdin-reader", daemon=True
        )
        reader.start()
        async for state in tracker.follow(subscription):
            _print_state(state, as_json)


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()

    parser = argparse.ArgumentParser(
        prog="mrt_tracker",
        description=f"{settings.app_name} - find the closest MRT/LRT station",
    )
    parser.add_argument("--lat", type=float, default=DEFAULT_LAT, help="Latitude (decimal degrees)")
    parser.add_argument("--long", type=float, default=DEFAULT_LONG, help="Longitude (decimal degrees)")
    parser.add_argument("--stations", default=None, help="Station JSON file (default: bundled list)")
    parser.add_argument("--follow", action="store_true", help="Read 'lat,long' lines from stdin")
    parser.add_argument("--json", action="store_true", help="Print JSON snapshots")
    parser.add_argument("--validate", action="store_true", help="Reject out-of-range positions")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    try:
        registry = load_registry(args.stations or settings.stations_file)
    except (FileNotFoundError, TrackerError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    tracker = LocationTracker(
        registry,
        validate_positions=args.validate or settings.validate_positions,
    )

    if args.follow:
        try:
            asyncio.run(_follow_stdin(tracker, FeedOptions.from_settings(settings), args.json))
        except KeyboardInterrupt:
            logger.info("Stopped")
        return 0

    state = tracker.locate(Coordinate(lat=args.lat, long=args.long))
    _print_state(state, args.json)
    return 1 if state.error else 0


if __name__ == "__main__":
    sys.exit(main())
