from __future__ import annotations

from datetime import date, datetime, time
from typing import Any

from ..core.exceptions import MalformedRecordError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_time(value: str) -> time:
    """Parse ``HH:MM`` or ``HH:MM:SS`` into time."""
    return time.fromisoformat(value)


def coerce_date(value: Any) -> date:
    """Accept a date, a datetime or an ISO date string.

    Raises MalformedRecordError for anything else so callers can skip the
    record and count it.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            # "2025-04-02T10:00:00" style payloads carry a time part
            return parse_iso_date(value.strip()[:10])
        except ValueError as e:
            raise MalformedRecordError(f"Unparsable date: {value!r}") from e
    raise MalformedRecordError(f"Unparsable date: {value!r}")


def iso_week(value: date) -> tuple[int, int]:
    """ISO-8601 (year, week); the week containing the year's first Thursday is week 1."""
    iso = value.isocalendar()
    return iso[0], iso[1]


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return date.today()
