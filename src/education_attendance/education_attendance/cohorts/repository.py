from __future__ import annotations

from typing import Optional, Protocol

from .model import Cohort


class CohortRepository(Protocol):
    """Read-only access to education bookings.

    Creation and administrative edits live elsewhere; the attendance core only resolves.
    """

    def get_by_id(self, cohort_id: str) -> Optional[Cohort]:
        raise NotImplementedError
