from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Sequence

from ..common.datetime_utils import format_iso_date
from ..core.enums import EnrollmentStatus, ReportCell


@dataclass(frozen=True)
class CohortHeader:
    """Read-model: the cohort fields printed above a report."""

    cohort_id: str
    section: str
    teacher_name: str
    period_start_date: date
    period_end_date: date


@dataclass(frozen=True)
class ReportRow:
    student_id: str
    full_name: str
    national_id: str
    school_name: str
    status: EnrollmentStatus
    cells: Sequence[ReportCell]

    def count(self, cell: ReportCell) -> int:
        return sum(1 for c in self.cells if c == cell)

    @property
    def present_count(self) -> int:
        return self.count(ReportCell.PRESENT)

    @property
    def absent_count(self) -> int:
        return self.count(ReportCell.ABSENT)

    @property
    def no_data_count(self) -> int:
        return self.count(ReportCell.NO_DATA)


@dataclass(frozen=True)
class RangeReport:
    """Pivoted attendance: one row per student, one column per calendar date.

    ``rows[i].cells[j]`` is the status of student i on ``dates[j]``.
    """

    cohort: CohortHeader
    start: date
    end: date
    dates: Sequence[date]
    rows: Sequence[ReportRow]

    @property
    def is_single_day(self) -> bool:
        return self.start == self.end

    def to_dict(self) -> dict:
        return {
            "education": {
                "educationId": self.cohort.cohort_id,
                "section": self.cohort.section,
                "teacherName": self.cohort.teacher_name,
                "periodStartDate": format_iso_date(self.cohort.period_start_date),
                "periodEndDate": format_iso_date(self.cohort.period_end_date),
            },
            "startDate": format_iso_date(self.start),
            "endDate": format_iso_date(self.end),
            "dates": [format_iso_date(d) for d in self.dates],
            "students": [
                {
                    "studentId": r.student_id,
                    "fullName": r.full_name,
                    "nationalId": r.national_id,
                    "schoolName": r.school_name,
                    "status": r.status.value,
                    "attendance": [c.value for c in r.cells],
                    "totals": {
                        "present": r.present_count,
                        "absent": r.absent_count,
                        "noData": r.no_data_count,
                    },
                }
                for r in self.rows
            ],
        }
