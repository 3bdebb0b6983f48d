from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from .model import Enrollment


class RosterProvider(Protocol):
    """Source of enrolled students for a cohort.

    Registration and removal are handled by the roster screens; this interface only reads.
    """

    def list_active_enrollments(self, cohort_id: str) -> Sequence[Enrollment]:
        """Students currently enrolled (status active), in enrollment order."""

        raise NotImplementedError

    def list_enrollments(self, cohort_id: str, student_ids: Iterable[str]) -> Sequence[Enrollment]:
        """Enrollments of the cohort with the given ids, whatever their status."""

        raise NotImplementedError
