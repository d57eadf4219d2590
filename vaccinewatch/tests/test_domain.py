from __future__ import annotations

import datetime as dt

import pytest

from vaccinewatch.domain import Appointment, FetchError, Location, parse_locations
from vaccinewatch.snapshot import take_snapshot


def _payload(*properties: dict) -> dict:
    return {"type": "FeatureCollection", "features": [{"type": "Feature", "properties": p} for p in properties]}


def test_parse_locations_reads_all_fields() -> None:
    payload = _payload(
        {
            "id": 7,
            "url": "https://example.test/book",
            "city": "Beverly Hills",
            "state": "CA",
            "address": "1 Main St",
            "name": "Store #7",
            "provider": "acme",
            "postal_code": "90210",
            "carries_vaccine": True,
            "appointments": [{"time": "2021-03-01T09:00:00.000-08:00", "type": "Moderna"}],
        }
    )

    [loc] = parse_locations(payload)

    assert loc.id == 7
    assert loc.postal_code == "90210"
    assert loc.provider == "acme"
    assert loc.name == "Store #7"
    assert loc.appointments is not None
    assert loc.appointments[0].time == dt.datetime(2021, 3, 1, 17, 0, tzinfo=dt.timezone.utc)
    assert loc.appointments[0].time.tzinfo is not None


def test_null_and_missing_fields_become_none() -> None:
    [loc] = parse_locations(_payload({"id": 1, "postal_code": None, "appointments": None}))
    assert loc == Location(id=1)


def test_naive_times_are_local() -> None:
    [loc] = parse_locations(_payload({"id": 1, "appointments": [{"time": "2021-03-01T09:00:00"}]}))
    assert loc.appointments == (Appointment(time=dt.datetime(2021, 3, 1, 9, 0).astimezone()),)


def test_utc_z_suffix_is_accepted() -> None:
    [loc] = parse_locations(_payload({"id": 1, "appointments": [{"time": "2021-03-01T17:00:00Z"}]}))
    assert loc.appointments is not None
    assert loc.appointments[0].time == dt.datetime(2021, 3, 1, 17, 0, tzinfo=dt.timezone.utc)


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {},
        {"features": None},
        {"features": [{}]},
        {"features": [{"properties": {"name": "no id"}}]},
        {"features": [{"properties": {"id": "7"}}]},
        {"features": [{"properties": {"id": True}}]},
        {"features": [{"properties": {"id": 1, "postal_code": 90210}}]},
        {"features": [{"properties": {"id": 1, "appointments": {"time": "2021-03-01T09:00:00"}}}]},
        {"features": [{"properties": {"id": 1, "appointments": [{"time": "tomorrow"}]}}]},
        {"features": [{"properties": {"id": 1, "appointments": [{}]}}]},
    ],
)
def test_malformed_payloads_raise_fetch_error(payload: object) -> None:
    with pytest.raises(FetchError):
        parse_locations(payload)


def test_take_snapshot_stores_missing_appointments_as_empty() -> None:
    appt = Appointment(time=dt.datetime(2021, 3, 1, 9, 0).astimezone())
    snapshot = take_snapshot([Location(id=1, appointments=(appt,)), Location(id=2)])
    assert snapshot == {1: (appt,), 2: ()}
