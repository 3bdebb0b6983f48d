from __future__ import annotations

from datetime import date

import pytest

from src.education_attendance.education_attendance.attendance.mysql_attendance_repository import (
    MySQLAttendanceRepository,
)
from src.education_attendance.education_attendance.core.enums import AttendanceStatus
from src.education_attendance.education_attendance.core.exceptions import (
    InvalidStatusError,
    NotFoundError,
    UnknownStudentError,
)


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self._result = []

    def execute(self, sql, params=()):
        self._conn.executed.append((" ".join(sql.split()), params))
        if "FROM educations" in sql:
            self._result = [{"education_id": params[0]}] if params[0] in self._conn.cohorts else []
        elif "FROM education_students" in sql:
            self._result = [{"student_id": sid} for sid in params[2:] if sid in self._conn.active]
        else:
            self._result = list(self._conn.rows)

    def executemany(self, sql, seq):
        if self._conn.fail_on_write:
            raise RuntimeError("connection lost")
        self._conn.executed_many.append((" ".join(sql.split()), list(seq)))

    def fetchone(self):
        return self._result[0] if self._result else None

    def fetchall(self):
        return self._result

    def close(self):
        pass


class FakeConnection:
    def __init__(self, cohorts=("E#00001",), rows=(), active=("S1", "S2"), fail_on_write=False):
        self.cohorts = set(cohorts)
        self.rows = list(rows)
        self.active = set(active)
        self.fail_on_write = fail_on_write
        self.executed = []
        self.executed_many = []
        self.committed = False
        self.rolled_back = False

    def cursor(self, dictionary=False):
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


class FakeFactory:
    def __init__(self, conn: FakeConnection):
        self.conn = conn

    def connect(self):
        return self.conn


def test_upsert_many_writes_one_batch_and_commits():
    conn = FakeConnection()
    repo = MySQLAttendanceRepository(FakeFactory(conn))

    written = repo.upsert_many("E#00001", date(2024, 1, 10), [("S1", "present"), ("S2", AttendanceStatus.ABSENT)])

    assert written == 2
    assert conn.committed and not conn.rolled_back
    sql, params = conn.executed_many[0]
    assert "ON DUPLICATE KEY UPDATE" in sql
    assert params == [
        ("E#00001", "S1", date(2024, 1, 10), "present"),
        ("E#00001", "S2", date(2024, 1, 10), "absent"),
    ]


def test_upsert_many_unknown_cohort_rolls_back_without_writing():
    conn = FakeConnection(cohorts=())
    repo = MySQLAttendanceRepository(FakeFactory(conn))

    with pytest.raises(NotFoundError):
        repo.upsert_many("E#00009", date(2024, 1, 10), [("S1", "present")])

    assert conn.rolled_back
    assert conn.executed_many == []


def test_upsert_many_locks_roster_rows_before_writing():
    conn = FakeConnection()
    repo = MySQLAttendanceRepository(FakeFactory(conn))

    repo.upsert_many("E#00001", date(2024, 1, 10), [("S1", "present")])

    sql, params = conn.executed[-1]
    assert "FROM education_students" in sql and sql.endswith("FOR UPDATE")
    assert params == ("E#00001", "active", "S1")


def test_upsert_many_student_removed_before_write_rolls_back():
    conn = FakeConnection(active=("S1",))
    repo = MySQLAttendanceRepository(FakeFactory(conn))

    with pytest.raises(UnknownStudentError) as exc:
        repo.upsert_many("E#00001", date(2024, 1, 10), [("S1", "present"), ("S2", "absent")])

    assert exc.value.student_ids == ["S2"]
    assert conn.rolled_back and not conn.committed
    assert conn.executed_many == []


def test_upsert_many_failed_write_rolls_back_and_propagates():
    conn = FakeConnection(fail_on_write=True)
    repo = MySQLAttendanceRepository(FakeFactory(conn))

    with pytest.raises(RuntimeError, match="connection lost"):
        repo.upsert_many("E#00001", date(2024, 1, 10), [("S1", "present"), ("S2", "absent")])

    assert conn.rolled_back
    assert not conn.committed


def test_upsert_many_invalid_status_never_opens_a_connection():
    conn = FakeConnection()
    repo = MySQLAttendanceRepository(FakeFactory(conn))

    with pytest.raises(InvalidStatusError):
        repo.upsert_many("E#00001", date(2024, 1, 10), [("S1", "maybe")])

    assert conn.executed == []


def test_get_range_groups_by_student():
    rows = [
        {"student_id": "S1", "attendance_date": date(2024, 1, 10), "status": "present"},
        {"student_id": "S1", "attendance_date": date(2024, 1, 11), "status": "absent"},
        {"student_id": "S2", "attendance_date": date(2024, 1, 11), "status": "present"},
    ]
    repo = MySQLAttendanceRepository(FakeFactory(FakeConnection(rows=rows)))

    result = repo.get_range("E#00001", date(2024, 1, 10), date(2024, 1, 12))

    assert result == {
        "S1": {date(2024, 1, 10): AttendanceStatus.PRESENT, date(2024, 1, 11): AttendanceStatus.ABSENT},
        "S2": {date(2024, 1, 11): AttendanceStatus.PRESENT},
    }


def test_get_by_date_empty():
    repo = MySQLAttendanceRepository(FakeFactory(FakeConnection()))

    assert repo.get_by_date("E#00001", date(2024, 1, 10)) == {}
