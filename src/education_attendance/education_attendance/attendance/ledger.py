from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Mapping, Optional

from ..cohorts.service import CohortDirectory
from ..common.datetime_utils import parse_iso_date
from ..common.validators import parse_status, require_non_empty
from ..core.enums import AttendanceStatus
from ..core.exceptions import UnknownStudentError
from ..roster.repository import RosterProvider
from .model import DaySummary
from .policies.default_present import DefaultPresentPolicy
from .repository import AttendanceStore

logger = logging.getLogger(__name__)


class AttendanceLedger:
    """Single-date attendance view for editing, and the commit path for edits.

    The view covers every currently active enrollment; students without a
    stored record are filled by ``fill_policy`` (present by default).
    Each call rebuilds its view from the roster and the store.
    """

    def __init__(
        self,
        store: AttendanceStore,
        roster: RosterProvider,
        cohorts: CohortDirectory,
        *,
        fill_policy: Optional[DefaultPresentPolicy] = None,
    ):
        self._store = store
        self._roster = roster
        self._cohorts = cohorts
        self._fill = fill_policy or DefaultPresentPolicy()

    def load_for_editing(self, cohort_id: str, day: date) -> Dict[str, AttendanceStatus]:
        day = parse_iso_date(day)
        cohort = self._cohorts.resolve_cohort(cohort_id)

        recorded = self._store.get_by_date(cohort.cohort_id, day)
        return {
            e.student_id: self._fill.status_for(recorded.get(e.student_id))
            for e in self._roster.list_active_enrollments(cohort.cohort_id)
        }

    def summarize(
        self,
        cohort_id: str,
        day: date,
        *,
        view: Optional[Mapping[str, AttendanceStatus]] = None,
    ) -> DaySummary:
        """Present/absent counts over the editing view; pass ``view`` to reuse one already loaded."""
        if view is None:
            view = self.load_for_editing(cohort_id, day)
        return DaySummary.from_statuses(view.values())

    def commit(self, cohort_id: str, day: date, edits: Mapping[str, object]) -> int:
        """Validate every edit, then write them in one store call.

        Nothing is written if any date, status or student is invalid.
        Students not in ``edits`` keep whatever they had.
        """
        day = parse_iso_date(day)
        cohort = self._cohorts.resolve_cohort(cohort_id)

        parsed: Dict[str, AttendanceStatus] = {}
        for student_id, status in edits.items():
            parsed[require_non_empty(student_id, "Student ID")] = parse_status(status)

        active_ids = {e.student_id for e in self._roster.list_active_enrollments(cohort.cohort_id)}
        unknown = [sid for sid in parsed if sid not in active_ids]
        if unknown:
            logger.warning(
                "Rejected attendance commit for %s on %s: %d unknown student(s)",
                cohort.cohort_id,
                day,
                len(unknown),
            )
            raise UnknownStudentError(unknown)

        written = self._store.upsert_many(cohort.cohort_id, day, list(parsed.items()))
        logger.info("Committed attendance for %s on %s (%d students)", cohort.cohort_id, day, written)
        return written
