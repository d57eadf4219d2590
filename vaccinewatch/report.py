from __future__ import annotations

import datetime as dt
from typing import Iterable

from vaccinewatch.domain import Appointment, Location

MISSING = "??"
HEADER_RULE = "=" * 10
LOCATION_RULE = "+" * 10


def _or_missing(value: str | None) -> str:
    return MISSING if value is None else value


def _format_time(value: dt.datetime) -> str:
    # 09:05am / 01:30pm, independent of locale
    return value.strftime("%I:%M") + ("am" if value.hour < 12 else "pm")


def format_appointment_days(appointments: Iterable[Appointment]) -> list[str]:
    """One line per calendar date, dates ascending, times in response order."""
    by_day: dict[dt.date, list[dt.datetime]] = {}
    for appt in appointments:
        by_day.setdefault(appt.time.date(), []).append(appt.time)

    lines = []
    for day in sorted(by_day):
        times = ", ".join(_format_time(t) for t in by_day[day])
        lines.append(f"{day.strftime('%m/%d/%Y')}: {times}")
    return lines


def format_location(loc: Location) -> str:
    lines = [
        f"{_or_missing(loc.provider)}-{_or_missing(loc.name)}",
        _or_missing(loc.url),
        _or_missing(loc.address),
        f"{_or_missing(loc.city)}, {_or_missing(loc.state)} {_or_missing(loc.postal_code)}",
    ]
    if loc.appointments:
        lines.extend(format_appointment_days(loc.appointments))
    # Two blank lines separate the last line from the closing rule.
    return "\n".join(lines) + "\n\n"


def render_report(
    locations: Iterable[Location],
    *,
    now: dt.datetime | None = None,
    blank_after_header: bool = False,
) -> str:
    """Header plus one ruled block per location.

    `blank_after_header` adds an empty line under the header, as used for the
    email body.
    """
    if now is None:
        now = dt.datetime.now().astimezone()

    parts = [
        HEADER_RULE,
        f"Report as of {now.strftime('%Y-%m-%d %H:%M:%S %z')}",
        HEADER_RULE,
    ]
    if blank_after_header:
        parts.append("")
    for loc in locations:
        parts.extend([LOCATION_RULE, format_location(loc), LOCATION_RULE])
    return "\n".join(parts) + "\n"
