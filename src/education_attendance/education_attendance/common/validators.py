from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.constants import MAX_REPORT_DAYS
from ..core.enums import AttendanceStatus
from ..core.exceptions import InvalidRangeError, InvalidStatusError, ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def parse_status(value: object) -> AttendanceStatus:
    if isinstance(value, AttendanceStatus):
        return value
    if isinstance(value, str):
        try:
            return AttendanceStatus(value.strip().lower())
        except ValueError:
            pass
    raise InvalidStatusError(f"Invalid attendance status: {value!r}")


def require_date_range(start: date, end: date, *, max_days: Optional[int] = MAX_REPORT_DAYS) -> int:
    """Check start <= end and the span limit; returns the number of days in range."""
    if start > end:
        raise InvalidRangeError(f"Start date {start.isoformat()} is after end date {end.isoformat()}")

    days = (end - start).days + 1
    if max_days is not None and days > int(max_days):
        raise InvalidRangeError(f"Date range of {days} days exceeds the limit of {max_days}")
    return days
