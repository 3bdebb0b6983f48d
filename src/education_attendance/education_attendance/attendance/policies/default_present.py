from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus, ReportCell
from .base import MissingRecordPolicy


class DefaultPresentPolicy(MissingRecordPolicy):
    """Editing view: a class is attended unless marked otherwise."""

    def resolve(self, recorded: Optional[AttendanceStatus]) -> ReportCell:
        if recorded is None:
            return ReportCell.PRESENT
        return ReportCell(recorded.value)

    def status_for(self, recorded: Optional[AttendanceStatus]) -> AttendanceStatus:
        return AttendanceStatus(self.resolve(recorded).value)
