"""Module: dates."""

from __future__ import annotations

from datetime import date, datetime, time

DAY_FORMAT = "%Y-%m-%d"


def day_string(value: date | datetime | str) -> str:
    """
    Canonical YYYY-MM-DD key for a calendar day.

    Datetimes contribute their own wall-clock date (never shifted through UTC),
    and backend strings such as "2024-06-01T00:00:00.000Z" keep only their
    first 10 characters.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        cleaned = value.strip()[:10]
        # Raises ValueError for anything that is not a calendar day.
        return datetime.strptime(cleaned, DAY_FORMAT).date().isoformat()
    raise ValueError(f"Cannot build a day string from {type(value).__name__}")


def parse_day(value: date | datetime | str) -> date:
    return datetime.strptime(day_string(value), DAY_FORMAT).date()


def normalize_time(value: time | str | None) -> str | None:
    """Return HH:MM:SS for HH:MM / HH:MM:SS / time values; None means whole day."""
    if value is None:
        return None
    if isinstance(value, time):
        return value.strftime("%H:%M:%S")

    cleaned = value.strip()
    if not cleaned:
        return None
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(cleaned, fmt).strftime("%H:%M:%S")
        except ValueError:
            continue
    raise ValueError(f"Invalid time {value!r} (expected HH:MM or HH:MM:SS)")
