from __future__ import annotations

import datetime as dt

import pytest

from vaccinewatch.diff import find_newly_available
from vaccinewatch.domain import Appointment, Location
from vaccinewatch.zip_filter import load_zip_filter


def test_no_path_means_no_filter() -> None:
    assert load_zip_filter(None) == frozenset()


def test_loads_zip_codes_as_given(tmp_path) -> None:
    path = tmp_path / "zips.json"
    path.write_text('["90210", " 10001 ", "90210"]', encoding="utf-8")

    # No normalisation: entries must match postal codes exactly.
    assert load_zip_filter(str(path)) == frozenset({"90210", " 10001 "})


def test_blank_entries_keep_the_filter_active(tmp_path) -> None:
    path = tmp_path / "zips.json"
    path.write_text('[""]', encoding="utf-8")

    zips = load_zip_filter(str(path))
    assert zips == frozenset({""})

    appt = Appointment(time=dt.datetime(2021, 3, 1, 9, 0).astimezone())
    current = [Location(id=1, postal_code="10001", appointments=(appt,))]
    assert find_newly_available(current, {}, zips) == []


@pytest.mark.parametrize("content", ["not json", '{"zips": ["90210"]}', '["90210", 10001]'])
def test_malformed_file_means_no_filter(tmp_path, caplog: pytest.LogCaptureFixture, content: str) -> None:
    path = tmp_path / "zips.json"
    path.write_text(content, encoding="utf-8")

    assert load_zip_filter(str(path)) == frozenset()
    assert "considering all zip codes" in caplog.text


def test_invalid_utf8_means_no_filter(tmp_path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "zips.json"
    path.write_bytes(b'["9021\xff"]')

    assert load_zip_filter(str(path)) == frozenset()
    assert "is not valid JSON" in caplog.text


def test_missing_file_means_no_filter(tmp_path, caplog: pytest.LogCaptureFixture) -> None:
    assert load_zip_filter(str(tmp_path / "missing.json")) == frozenset()
    assert "Failed to read zip list" in caplog.text
