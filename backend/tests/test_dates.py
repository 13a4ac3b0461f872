"""
Tests for core/dates.py

Day keys and clock-time normalization shared by every date comparison.
"""

from datetime import date, datetime, time, timedelta, timezone

import pytest

from clinic_console.core.dates import day_string, normalize_time, parse_day


def test_day_string_keeps_local_calendar_day():
    # 23:30 at UTC+9 is still June 1st on the wall clock.
    local = datetime(2024, 6, 1, 23, 30, tzinfo=timezone(timedelta(hours=9)))
    assert day_string(local) == "2024-06-01"


def test_day_string_accepts_dates_and_iso_strings():
    assert day_string(date(2024, 1, 5)) == "2024-01-05"
    assert day_string("2024-06-01") == "2024-06-01"
    assert day_string("2024-06-01T00:00:00.000Z") == "2024-06-01"
    assert day_string(" 2024-06-01 ") == "2024-06-01"


def test_day_string_pads_early_years():
    assert day_string(date(999, 3, 7)) == "0999-03-07"


@pytest.mark.parametrize("value", ["2024-13-01", "yesterday", "", 20240601])
def test_day_string_rejects_non_days(value):
    with pytest.raises(ValueError):
        day_string(value)


def test_parse_day_round_trips_to_date():
    assert parse_day("2024-02-29T12:00:00Z") == date(2024, 2, 29)


def test_normalize_time_formats():
    assert normalize_time("10:00") == "10:00:00"
    assert normalize_time("10:00:00") == "10:00:00"
    assert normalize_time(time(21, 5)) == "21:05:00"


def test_normalize_time_treats_empty_as_whole_day():
    assert normalize_time(None) is None
    assert normalize_time("") is None
    assert normalize_time("   ") is None


def test_normalize_time_rejects_garbage():
    with pytest.raises(ValueError):
        normalize_time("25:00")
