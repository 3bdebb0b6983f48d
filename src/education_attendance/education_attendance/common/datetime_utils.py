from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterator

from ..core.constants import DATE_FORMAT
from ..core.exceptions import InvalidDateError


def parse_iso_date(value: object, field_name: str = "date") -> date:
    """Parse YYYY-MM-DD string into date.

    Plain ``date`` objects pass through; ``datetime`` is rejected so a
    timestamp never silently lands on a calendar day.
    """
    if isinstance(value, datetime):
        raise InvalidDateError(f"{field_name} must be a calendar date, got a timestamp")
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidDateError(f"{field_name} is required")
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError:
        raise InvalidDateError(f"{field_name} is not a valid date: {value!r}") from None


def format_iso_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Every calendar day from start to end inclusive, ascending."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch it.
    """
    return date.today()
