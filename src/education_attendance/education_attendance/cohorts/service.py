from __future__ import annotations

from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError
from .model import Cohort
from .repository import CohortRepository


class CohortDirectory:
    def __init__(self, cohorts: CohortRepository):
        self._cohorts = cohorts

    def resolve_cohort(self, cohort_id: str) -> Cohort:
        cohort_id = require_non_empty(cohort_id, "Education ID")
        cohort = self._cohorts.get_by_id(cohort_id)
        if not cohort:
            raise NotFoundError(f"Education {cohort_id} not found", detail={"cohort_id": cohort_id})
        return cohort
