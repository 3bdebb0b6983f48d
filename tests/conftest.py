from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from typing import Dict, Iterable, Optional, Tuple

import pytest

from src.education_attendance.education_attendance.attendance.repository import prepare_upsert
from src.education_attendance.education_attendance.cohorts.model import Cohort
from src.education_attendance.education_attendance.container import wire
from src.education_attendance.education_attendance.core.enums import (
    AttendanceStatus,
    CohortStatus,
    EnrollmentStatus,
)
from src.education_attendance.education_attendance.core.exceptions import NotFoundError
from src.education_attendance.education_attendance.roster.model import Enrollment


class InMemoryCohorts:
    def __init__(self, cohorts: Iterable[Cohort] = ()):
        self._by_id = {c.cohort_id: c for c in cohorts}

    def get_by_id(self, cohort_id: str) -> Optional[Cohort]:
        return self._by_id.get(cohort_id)


class InMemoryRoster:
    def __init__(self, enrollments: Iterable[Enrollment] = ()):
        self.enrollments = list(enrollments)

    def list_active_enrollments(self, cohort_id: str):
        items = [e for e in self.enrollments if e.cohort_id == cohort_id and e.is_active]
        items.sort(key=lambda e: (e.created_at, e.student_id))
        return items

    def list_enrollments(self, cohort_id: str, student_ids):
        wanted = set(student_ids)
        return [e for e in self.enrollments if e.cohort_id == cohort_id and e.student_id in wanted]

    def remove(self, student_id: str) -> None:
        self.enrollments = [
            replace(e, status=EnrollmentStatus.REMOVED) if e.student_id == student_id else e
            for e in self.enrollments
        ]


class InMemoryAttendance:
    """Keyed by (student_id, date) like the unique index of the real table."""

    def __init__(self, cohort_ids: Iterable[str]):
        self._cohort_ids = set(cohort_ids)
        self._records: Dict[Tuple[str, date], Tuple[str, AttendanceStatus]] = {}
        self.upsert_calls = 0

    def _require_cohort(self, cohort_id: str) -> None:
        if cohort_id not in self._cohort_ids:
            raise NotFoundError(f"Education {cohort_id} not found")

    def get_by_date(self, cohort_id: str, day: date):
        self._require_cohort(cohort_id)
        return {sid: status for (sid, d), (cid, status) in self._records.items() if cid == cohort_id and d == day}

    def get_range(self, cohort_id: str, start: date, end: date):
        self._require_cohort(cohort_id)
        out: dict = {}
        for (sid, d), (cid, status) in sorted(self._records.items()):
            if cid == cohort_id and start <= d <= end:
                out.setdefault(sid, {})[d] = status
        return out

    def upsert_many(self, cohort_id: str, day: date, records) -> int:
        day, rows = prepare_upsert(day, records)
        self._require_cohort(cohort_id)
        self.upsert_calls += 1
        for sid, status in rows:
            self._records[(sid, day)] = (cohort_id, status)
        return len(rows)

    def snapshot(self) -> dict:
        return dict(self._records)


def make_cohort(cohort_id: str = "E#00001") -> Cohort:
    return Cohort(
        cohort_id=cohort_id,
        teacher_id="U#00001",
        teacher_name="Mona Teacher",
        section="Electronics",
        period_start_date=date(2024, 1, 1),
        period_end_date=date(2024, 3, 31),
        period_start_time=time(16, 0),
        period_end_time=time(18, 0),
        status=CohortStatus.ACTIVE,
    )


def make_student(student_id: str, name: str, *, minute: int, cohort_id: str = "E#00001") -> Enrollment:
    return Enrollment(
        student_id=student_id,
        cohort_id=cohort_id,
        full_name=name,
        national_id=f"ID-{student_id}",
        school_name="North School",
        created_at=datetime(2024, 1, 1, 9, minute),
    )


@pytest.fixture
def roster() -> InMemoryRoster:
    return InMemoryRoster(
        [
            make_student("S1", "Ahmad", minute=0),
            make_student("S2", "Basma", minute=1),
            make_student("S3", "Carim", minute=2),
            make_student("X1", "Other cohort", minute=0, cohort_id="E#00002"),
        ]
    )


@pytest.fixture
def store() -> InMemoryAttendance:
    return InMemoryAttendance(["E#00001", "E#00002"])


@pytest.fixture
def container(roster, store):
    cohorts = InMemoryCohorts([make_cohort("E#00001"), make_cohort("E#00002")])
    return wire(conn=None, cohorts_repo=cohorts, roster=roster, attendance_store=store, max_report_days=31)


@pytest.fixture
def ledger(container):
    return container.attendance_ledger


@pytest.fixture
def builder(container):
    return container.report_builder
