from __future__ import annotations

import logging
import threading
from typing import AbstractSet, Sequence

from vaccinewatch.api_client import build_state_url, fetch_locations
from vaccinewatch.config import Settings
from vaccinewatch.diff import find_newly_available
from vaccinewatch.domain import FetchError, Location, Snapshot
from vaccinewatch.notifier import Notifier
from vaccinewatch.snapshot import empty_snapshot, take_snapshot

logger = logging.getLogger(__name__)


def _fetch(settings: Settings) -> list[Location]:
    logger.info("Requesting new appointments: %s", build_state_url(settings.api_base_url, settings.state))
    return fetch_locations(base_url=settings.api_base_url, state=settings.state)


def _report(
    current: Sequence[Location],
    *,
    snapshot: Snapshot,
    notifier: Notifier,
    zip_filter: AbstractSet[str],
) -> Snapshot:
    newly_available = find_newly_available(current, snapshot, zip_filter)
    logger.info("Locations: received=%d new=%d", len(current), len(newly_available))

    try:
        notifier.notify(newly_available)
    except Exception:
        # Notification never blocks the snapshot update.
        logger.error("Notifier failed", exc_info=True)

    return take_snapshot(current)


def run_cycle(
    settings: Settings,
    *,
    snapshot: Snapshot,
    notifier: Notifier,
    zip_filter: AbstractSet[str],
) -> Snapshot:
    """Fetch, diff, notify. Returns the snapshot to use for the next cycle.

    On a failed fetch the given snapshot is returned untouched.
    """
    try:
        current = _fetch(settings)
    except FetchError as e:
        logger.error("Failed to request new appointments (%s)", e)
        return snapshot

    return _report(current, snapshot=snapshot, notifier=notifier, zip_filter=zip_filter)


def run_check_once(settings: Settings, *, notifier: Notifier, zip_filter: AbstractSet[str]) -> None:
    """Single check against an empty snapshot. FetchError propagates to the caller."""
    current = _fetch(settings)
    _report(current, snapshot=empty_snapshot(), notifier=notifier, zip_filter=zip_filter)


def run_forever(
    settings: Settings,
    *,
    notifier: Notifier,
    zip_filter: AbstractSet[str],
    stop: threading.Event | None = None,
) -> None:
    if stop is None:
        stop = threading.Event()

    logger.info("Worker started. State=%s interval=%ss", settings.state, settings.check_interval_seconds)
    snapshot = empty_snapshot()
    while not stop.is_set():
        try:
            snapshot = run_cycle(settings, snapshot=snapshot, notifier=notifier, zip_filter=zip_filter)
        except Exception as e:
            logger.error("Check failed in run_forever (%s: %s)", type(e).__name__, e)
        if stop.wait(settings.check_interval_seconds):
            break
    logger.info("Worker stopped.")
