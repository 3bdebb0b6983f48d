from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Dict, List, Optional

from ..attendance.policies.no_data import NoDataPolicy
from ..attendance.repository import AttendanceStore
from ..cohorts.service import CohortDirectory
from ..common.datetime_utils import iter_dates, parse_iso_date
from ..common.validators import require_date_range
from ..core.constants import MAX_REPORT_DAYS
from ..core.enums import EnrollmentStatus
from ..roster.model import Enrollment
from ..roster.repository import RosterProvider
from .model import CohortHeader, RangeReport, ReportRow

logger = logging.getLogger(__name__)


def _row_order(e: Enrollment):
    # Enrollment order first; rows without a timestamp go last.
    return (e.created_at is None, e.created_at or datetime.min, e.full_name.casefold(), e.student_id)


class RangeReportBuilder:
    def __init__(
        self,
        store: AttendanceStore,
        roster: RosterProvider,
        cohorts: CohortDirectory,
        *,
        fill_policy: Optional[NoDataPolicy] = None,
        max_days: Optional[int] = MAX_REPORT_DAYS,
    ):
        self._store = store
        self._roster = roster
        self._cohorts = cohorts
        self._fill = fill_policy or NoDataPolicy()
        self._max_days = max_days

    def build(self, cohort_id: str, start: date, end: date) -> RangeReport:
        start = parse_iso_date(start, "startDate")
        end = parse_iso_date(end, "endDate")
        require_date_range(start, end, max_days=self._max_days)

        cohort = self._cohorts.resolve_cohort(cohort_id)
        dates = list(iter_dates(start, end))
        recorded = self._store.get_range(cohort.cohort_id, start, end)

        students: Dict[str, Enrollment] = {e.student_id: e for e in self._roster.list_active_enrollments(cohort.cohort_id)}
        missing = [sid for sid in recorded if sid not in students]
        if missing:
            for e in self._roster.list_enrollments(cohort.cohort_id, missing):
                students[e.student_id] = e
            for sid in missing:
                if sid not in students:
                    logger.warning("Attendance for %s references student %s missing from the roster", cohort.cohort_id, sid)
                    students[sid] = Enrollment(
                        student_id=sid,
                        cohort_id=cohort.cohort_id,
                        full_name="",
                        national_id="",
                        school_name="",
                        status=EnrollmentStatus.REMOVED,
                    )

        rows: List[ReportRow] = []
        for e in sorted(students.values(), key=_row_order):
            by_date = recorded.get(e.student_id, {})
            rows.append(
                ReportRow(
                    student_id=e.student_id,
                    full_name=e.full_name,
                    national_id=e.national_id,
                    school_name=e.school_name,
                    status=e.status,
                    cells=tuple(self._fill.resolve(by_date.get(d)) for d in dates),
                )
            )

        return RangeReport(
            cohort=CohortHeader(
                cohort_id=cohort.cohort_id,
                section=cohort.section_label,
                teacher_name=cohort.teacher_name,
                period_start_date=cohort.period_start_date,
                period_end_date=cohort.period_end_date,
            ),
            start=start,
            end=end,
            dates=dates,
            rows=rows,
        )

    def build_single_day(self, cohort_id: str, day: date) -> RangeReport:
        """Single-day export goes through the same pivot as a range of one day."""
        day = parse_iso_date(day)
        return self.build(cohort_id, day, day)
