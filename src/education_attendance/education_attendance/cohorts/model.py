from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import CohortStatus


@dataclass(frozen=True)
class Cohort:
    """Domain entity: an education booking (a class group with a fixed roster and time window)."""

    cohort_id: str
    teacher_id: str
    teacher_name: str
    section: str
    period_start_date: date
    period_end_date: date
    period_start_time: Optional[time]
    period_end_time: Optional[time]
    status: CohortStatus = CohortStatus.PENDING
    other_section_description: Optional[str] = None

    @property
    def section_label(self) -> str:
        if self.section == "Other" and self.other_section_description:
            return self.other_section_description
        return self.section
