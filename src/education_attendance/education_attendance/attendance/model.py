from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's status on one date. Unique per (student_id, date)."""

    cohort_id: str
    student_id: str
    date: date
    status: AttendanceStatus


@dataclass(frozen=True)
class DaySummary:
    present: int
    absent: int

    @classmethod
    def from_statuses(cls, statuses: Iterable[AttendanceStatus]) -> "DaySummary":
        present = absent = 0
        for s in statuses:
            if s == AttendanceStatus.PRESENT:
                present += 1
            else:
                absent += 1
        return cls(present=present, absent=absent)

    @property
    def total(self) -> int:
        return self.present + self.absent

    def to_dict(self) -> dict:
        return {"present": self.present, "absent": self.absent, "total": self.total}
