from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, order=True)
class Appointment:
    """A single bookable slot.

    `time` is always timezone-aware and normalised to the local timezone, so
    equality means "same instant".
    """

    time: dt.datetime


@dataclass(frozen=True)
class Location:
    id: int
    postal_code: str | None = None

    # Display-only
    name: str | None = None
    provider: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    url: str | None = None

    # None means the API sent no appointment list at all.
    appointments: tuple[Appointment, ...] | None = None


# location id -> appointments seen in one successful poll
Snapshot = dict[int, tuple[Appointment, ...]]


class FetchError(RuntimeError):
    """The API could not be reached or returned something we can't use.

    Always transient from the worker's point of view: the cycle is skipped and
    the previous snapshot stays in place.
    """


def parse_appointment_time(raw: str) -> dt.datetime:
    value = dt.datetime.fromisoformat(raw.strip())
    # Naive timestamps are taken as local time.
    return value.astimezone()


def _optional_str(props: dict[str, Any], key: str) -> str | None:
    value = props.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise FetchError(f"Unexpected type for {key!r}: {type(value).__name__}")
    return value


def _parse_appointments(raw: Any) -> tuple[Appointment, ...] | None:
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise FetchError(f"Unexpected type for 'appointments': {type(raw).__name__}")

    result: list[Appointment] = []
    for item in raw:
        if not isinstance(item, dict) or not isinstance(item.get("time"), str):
            raise FetchError(f"Malformed appointment entry: {item!r}")
        try:
            result.append(Appointment(time=parse_appointment_time(item["time"])))
        except ValueError as e:
            raise FetchError(f"Invalid appointment time: {item['time']!r}") from e
    return tuple(result)


def location_from_feature(feature: Any) -> Location:
    if not isinstance(feature, dict) or not isinstance(feature.get("properties"), dict):
        raise FetchError("Feature without 'properties' object")
    props = feature["properties"]

    loc_id = props.get("id")
    # bool is an int subclass; reject it explicitly.
    if not isinstance(loc_id, int) or isinstance(loc_id, bool) or loc_id < 0:
        raise FetchError(f"Invalid location id: {loc_id!r}")

    return Location(
        id=loc_id,
        postal_code=_optional_str(props, "postal_code"),
        name=_optional_str(props, "name"),
        provider=_optional_str(props, "provider"),
        address=_optional_str(props, "address"),
        city=_optional_str(props, "city"),
        state=_optional_str(props, "state"),
        url=_optional_str(props, "url"),
        appointments=_parse_appointments(props.get("appointments")),
    )


def parse_locations(payload: Any) -> list[Location]:
    """Turn a decoded API response into locations, in response order."""
    if not isinstance(payload, dict) or not isinstance(payload.get("features"), list):
        raise FetchError("Response has no 'features' list")
    return [location_from_feature(f) for f in payload["features"]]
