from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...core.enums import AttendanceStatus, ReportCell


class MissingRecordPolicy(ABC):
    """Strategy Pattern: decide what a (student, date) without a stored record means."""

    @abstractmethod
    def resolve(self, recorded: Optional[AttendanceStatus]) -> ReportCell:
        raise NotImplementedError
