from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Iterable, Tuple

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_date_range
from ..core.enums import AttendanceStatus, EnrollmentStatus
from ..core.exceptions import NotFoundError, UnknownStudentError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_placeholders
from .repository import AttendanceStore, prepare_upsert

logger = logging.getLogger(__name__)


def _require_cohort(cur, cohort_id: str) -> None:
    cur.execute("SELECT education_id FROM educations WHERE education_id=%s", (cohort_id,))
    if not fetchone(cur):
        raise NotFoundError(f"Education {cohort_id} not found", detail={"cohort_id": cohort_id})


def _lock_active_students(cur, cohort_id: str, student_ids) -> None:
    """Lock the roster rows being written; a student removed meanwhile fails the write."""
    ids = list(student_ids)
    cur.execute(
        f"""
        SELECT student_id
        FROM education_students
        WHERE education_id=%s AND status=%s AND student_id IN ({in_placeholders(ids)})
        FOR UPDATE
        """,
        (cohort_id, EnrollmentStatus.ACTIVE.value, *ids),
    )
    locked = {r["student_id"] for r in fetchall(cur)}
    missing = [sid for sid in ids if sid not in locked]
    if missing:
        raise UnknownStudentError(missing)


class MySQLAttendanceRepository(AttendanceStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_date(self, cohort_id: str, day: date) -> Dict[str, AttendanceStatus]:
        day = parse_iso_date(day)
        with db_cursor(self._conn_factory) as (_, cur):
            _require_cohort(cur, cohort_id)
            cur.execute(
                """
                SELECT student_id, status
                FROM education_attendance
                WHERE education_id=%s AND attendance_date=%s
                """,
                (cohort_id, day),
            )
            return {r["student_id"]: AttendanceStatus(r["status"]) for r in fetchall(cur)}

    def get_range(self, cohort_id: str, start: date, end: date) -> Dict[str, Dict[date, AttendanceStatus]]:
        start = parse_iso_date(start, "startDate")
        end = parse_iso_date(end, "endDate")
        require_date_range(start, end, max_days=None)

        with db_cursor(self._conn_factory) as (_, cur):
            _require_cohort(cur, cohort_id)
            cur.execute(
                """
                SELECT student_id, attendance_date, status
                FROM education_attendance
                WHERE education_id=%s AND attendance_date BETWEEN %s AND %s
                ORDER BY attendance_date ASC, student_id ASC
                """,
                (cohort_id, start, end),
            )
            out: Dict[str, Dict[date, AttendanceStatus]] = {}
            for r in fetchall(cur):
                out.setdefault(r["student_id"], {})[r["attendance_date"]] = AttendanceStatus(r["status"])
            return out

    def upsert_many(self, cohort_id: str, day: date, records: Iterable[Tuple[str, AttendanceStatus]]) -> int:
        day, rows = prepare_upsert(day, records)

        with db_cursor(self._conn_factory) as (_, cur):
            _require_cohort(cur, cohort_id)
            if not rows:
                return 0
            _lock_active_students(cur, cohort_id, [student_id for student_id, _ in rows])
            # Single statement inside one transaction: InnoDB locks each
            # (student_id, attendance_date) key, so concurrent commits for the
            # same day serialize and the last one wins.
            cur.executemany(
                """
                INSERT INTO education_attendance(education_id, student_id, attendance_date, status)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status), updated_at=CURRENT_TIMESTAMP
                """,
                [(cohort_id, student_id, day, status.value) for student_id, status in rows],
            )
            logger.debug("Upserted %d attendance rows for %s on %s", len(rows), cohort_id, day)
            return len(rows)
