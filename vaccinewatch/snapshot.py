from __future__ import annotations

from typing import Iterable

from vaccinewatch.domain import Location, Snapshot


def empty_snapshot() -> Snapshot:
    return {}


def take_snapshot(locations: Iterable[Location]) -> Snapshot:
    """Build the full replacement snapshot from one successful response.

    Locations without an appointment list are stored with an empty one, so
    they count as "known" on the next cycle.
    """
    return {loc.id: loc.appointments or () for loc in locations}
