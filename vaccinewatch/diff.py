from __future__ import annotations

import logging
from typing import AbstractSet, Iterable, Sequence

from vaccinewatch.domain import Appointment, Location, Snapshot

logger = logging.getLogger(__name__)


def contains_new_appointments(current: Iterable[Appointment], previous: Iterable[Appointment]) -> bool:
    seen = set(previous)
    return any(appt not in seen for appt in current)


def zip_allowed(location: Location, zip_filter: AbstractSet[str]) -> bool:
    # Locations without a postal code are never reported, filter or not.
    if location.postal_code is None:
        return False
    return not zip_filter or location.postal_code in zip_filter


def find_newly_available(
    current: Sequence[Location],
    previous: Snapshot,
    zip_filter: AbstractSet[str],
) -> list[Location]:
    """Locations whose current appointments include a slot not seen last time.

    A location missing from `previous` is new as soon as it has any
    appointment. Disappearing appointments are never reported. Input order is
    preserved.
    """
    result: list[Location] = []
    for loc in current:
        if not loc.appointments:
            continue

        known = previous.get(loc.id)
        if known is not None and not contains_new_appointments(loc.appointments, known):
            continue

        if not zip_allowed(loc, zip_filter):
            logger.debug("Location %s has new appointments but is filtered out by zip", loc.id)
            continue

        result.append(loc)
    return result
