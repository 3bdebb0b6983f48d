from __future__ import annotations

from typing import Optional

from ..core.enums import CohortStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from .model import Cohort
from .repository import CohortRepository


class MySQLCohortRepository(CohortRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, cohort_id: str) -> Optional[Cohort]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    e.education_id, e.user_id, u.name AS teacher_name,
                    e.section, e.other_section_description,
                    e.period_start_date, e.period_end_date,
                    e.period_start_time, e.period_end_time, e.status
                FROM educations e
                LEFT JOIN users u ON u.user_id = e.user_id
                WHERE e.education_id=%s
                """,
                (cohort_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Cohort(
                cohort_id=r["education_id"],
                teacher_id=r["user_id"],
                teacher_name=r.get("teacher_name") or "",
                section=r["section"],
                other_section_description=r.get("other_section_description"),
                period_start_date=r["period_start_date"],
                period_end_date=r["period_end_date"],
                period_start_time=normalize_mysql_time(r.get("period_start_time")),
                period_end_time=normalize_mysql_time(r.get("period_end_time")),
                status=CohortStatus(r["status"]),
            )
