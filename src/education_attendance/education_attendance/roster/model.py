from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import EnrollmentStatus


@dataclass(frozen=True)
class Enrollment:
    """Domain entity: a student's membership in one education cohort."""

    student_id: str
    cohort_id: str
    full_name: str
    national_id: str
    school_name: str
    phone_number: Optional[str] = None
    education_level: Optional[str] = None
    parent_phone_number: Optional[str] = None
    status: EnrollmentStatus = EnrollmentStatus.ACTIVE
    created_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == EnrollmentStatus.ACTIVE
