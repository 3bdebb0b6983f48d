from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.ledger import AttendanceLedger
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceStore
from .cohorts.mysql_cohort_repository import MySQLCohortRepository
from .cohorts.service import CohortDirectory
from .core.constants import MAX_REPORT_DAYS
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import RangeReportBuilder
from .roster.mysql_roster_repository import MySQLRosterRepository
from .roster.repository import RosterProvider


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    attendance_store: AttendanceStore
    roster: RosterProvider

    cohort_directory: CohortDirectory
    attendance_ledger: AttendanceLedger
    report_builder: RangeReportBuilder


def wire(
    *,
    conn: Optional[DatabaseConnection],
    cohorts_repo,
    roster: RosterProvider,
    attendance_store: AttendanceStore,
    max_report_days: Optional[int] = MAX_REPORT_DAYS,
) -> Container:
    cohort_directory = CohortDirectory(cohorts_repo)
    attendance_ledger = AttendanceLedger(attendance_store, roster, cohort_directory)
    report_builder = RangeReportBuilder(attendance_store, roster, cohort_directory, max_days=max_report_days)

    return Container(
        conn=conn,
        attendance_store=attendance_store,
        roster=roster,
        cohort_directory=cohort_directory,
        attendance_ledger=attendance_ledger,
        report_builder=report_builder,
    )


def build_container(*, db_config: dict, max_report_days: Optional[int] = MAX_REPORT_DAYS) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire(
        conn=conn,
        cohorts_repo=MySQLCohortRepository(conn),
        roster=MySQLRosterRepository(conn),
        attendance_store=MySQLAttendanceRepository(conn),
        max_report_days=max_report_days,
    )
