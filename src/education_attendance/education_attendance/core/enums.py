from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Recorded attendance status stored per (student, date)."""

    PRESENT = "present"
    ABSENT = "absent"


class ReportCell(str, Enum):
    """Cell value in a pivoted report.

    Mirrors AttendanceStatus plus the marker for dates nothing was recorded on.
    """

    PRESENT = "present"
    ABSENT = "absent"
    NO_DATA = "no-data"


class EnrollmentStatus(str, Enum):
    ACTIVE = "active"
    REMOVED = "removed"


class CohortStatus(str, Enum):
    """Lifecycle of an education booking."""

    PENDING = "pending"
    APPROVED = "approved"
    ACTIVE = "active"
    COMPLETED = "completed"
    REJECTED = "rejected"


class ErrorKind(str, Enum):
    """Locale-neutral error kinds returned to callers."""

    INVALID_REQUEST = "invalid_request"
    NOT_FOUND = "not_found"
    INVALID_DATE = "invalid_date"
    INVALID_RANGE = "invalid_range"
    INVALID_STATUS = "invalid_status"
    UNKNOWN_STUDENT = "unknown_student"
