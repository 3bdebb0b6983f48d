from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus, ReportCell
from .base import MissingRecordPolicy


class NoDataPolicy(MissingRecordPolicy):
    """Historical reports: a day nobody recorded stays unknown."""

    def resolve(self, recorded: Optional[AttendanceStatus]) -> ReportCell:
        if recorded is None:
            return ReportCell.NO_DATA
        return ReportCell(recorded.value)
