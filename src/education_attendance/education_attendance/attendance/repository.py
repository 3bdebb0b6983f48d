from __future__ import annotations

from datetime import date
from typing import Iterable, Mapping, Protocol, Sequence, Tuple

from ..common.datetime_utils import parse_iso_date
from ..common.validators import parse_status, require_non_empty
from ..core.enums import AttendanceStatus

StatusByStudent = Mapping[str, AttendanceStatus]
StatusByStudentAndDate = Mapping[str, Mapping[date, AttendanceStatus]]


class AttendanceStore(Protocol):
    """Durable keyed access to attendance records.

    All operations fail with NotFoundError when the cohort does not exist.
    """

    def get_by_date(self, cohort_id: str, day: date) -> StatusByStudent:
        """Recorded statuses on one date; empty mapping if nothing was recorded."""

        raise NotImplementedError

    def get_range(self, cohort_id: str, start: date, end: date) -> StatusByStudentAndDate:
        """student_id -> {date -> status} for recorded dates in [start, end] only."""

        raise NotImplementedError

    def upsert_many(self, cohort_id: str, day: date, records: Iterable[Tuple[str, AttendanceStatus]]) -> int:
        """Replace the record at (student_id, day) for each given student, all-or-nothing.

        Raises UnknownStudentError if any student is not actively enrolled
        at write time. Returns the number of students written.
        """

        raise NotImplementedError


def prepare_upsert(day: object, records: Iterable[Tuple[str, object]]) -> tuple[date, Sequence[Tuple[str, AttendanceStatus]]]:
    """Validate a batch before it touches storage.

    Raises InvalidDateError / InvalidStatusError; a repeated student id keeps its last status.
    """
    parsed_day = parse_iso_date(day)

    by_student: dict[str, AttendanceStatus] = {}
    for student_id, status in records:
        sid = require_non_empty(student_id, "Student ID")
        by_student[sid] = parse_status(status)
    return parsed_day, list(by_student.items())
