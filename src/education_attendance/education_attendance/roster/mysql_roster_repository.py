from __future__ import annotations

from typing import Iterable, Sequence

from ..core.enums import EnrollmentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_placeholders
from .model import Enrollment
from .repository import RosterProvider

_COLUMNS = """
    student_id, education_id, full_name, national_id, phone_number,
    school_name, education_level, parent_phone_number, status, created_at
"""


def _to_enrollment(r: dict) -> Enrollment:
    return Enrollment(
        student_id=r["student_id"],
        cohort_id=r["education_id"],
        full_name=r["full_name"],
        national_id=r["national_id"],
        school_name=r["school_name"],
        phone_number=r.get("phone_number"),
        education_level=r.get("education_level"),
        parent_phone_number=r.get("parent_phone_number"),
        status=EnrollmentStatus(r["status"]),
        created_at=r.get("created_at"),
    )


class MySQLRosterRepository(RosterProvider):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active_enrollments(self, cohort_id: str) -> Sequence[Enrollment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM education_students
                WHERE education_id=%s AND status=%s
                ORDER BY created_at ASC, student_id ASC
                """,
                (cohort_id, EnrollmentStatus.ACTIVE.value),
            )
            return [_to_enrollment(r) for r in fetchall(cur)]

    def list_enrollments(self, cohort_id: str, student_ids: Iterable[str]) -> Sequence[Enrollment]:
        ids = sorted({str(s) for s in student_ids})
        if not ids:
            return []

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM education_students
                WHERE education_id=%s AND student_id IN ({in_placeholders(ids)})
                ORDER BY created_at ASC, student_id ASC
                """,
                (cohort_id, *ids),
            )
            return [_to_enrollment(r) for r in fetchall(cur)]
