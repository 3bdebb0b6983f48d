from __future__ import annotations

from typing import Any, Optional, Sequence

from .enums import ErrorKind


class DomainError(Exception):
    """Base exception for business rule violations."""

    kind: ErrorKind = ErrorKind.INVALID_REQUEST

    def __init__(self, message: str, *, detail: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.detail = dict(detail or {})


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a cohort or student required by the operation is absent."""

    kind = ErrorKind.NOT_FOUND


class InvalidDateError(ValidationError):
    kind = ErrorKind.INVALID_DATE


class InvalidRangeError(ValidationError):
    kind = ErrorKind.INVALID_RANGE


class InvalidStatusError(ValidationError):
    kind = ErrorKind.INVALID_STATUS


class UnknownStudentError(ValidationError):
    """Raised when a commit references students not actively enrolled in the cohort."""

    kind = ErrorKind.UNKNOWN_STUDENT

    def __init__(self, student_ids: Sequence[str]):
        ids = sorted({str(s) for s in student_ids})
        super().__init__(f"Unknown student(s) for cohort: {', '.join(ids)}", detail={"student_ids": ids})
        self.student_ids = ids
