from __future__ import annotations

from datetime import date

import pytest

from src.education_attendance.education_attendance.core.enums import AttendanceStatus
from src.education_attendance.education_attendance.core.exceptions import (
    InvalidDateError,
    InvalidStatusError,
    NotFoundError,
    UnknownStudentError,
)

P = AttendanceStatus.PRESENT
A = AttendanceStatus.ABSENT
D = date(2024, 1, 10)


def test_load_for_editing_defaults_every_active_student_to_present(ledger):
    assert ledger.load_for_editing("E#00001", D) == {"S1": P, "S2": P, "S3": P}


def test_commit_override_is_returned_and_others_stay_present(ledger):
    ledger.commit("E#00001", D, {"S1": "absent"})

    assert ledger.load_for_editing("E#00001", D) == {"S1": A, "S2": P, "S3": P}


def test_commit_twice_is_idempotent(ledger, store):
    edits = {"S1": "absent", "S2": "present"}

    ledger.commit("E#00001", D, edits)
    once = store.snapshot()
    ledger.commit("E#00001", D, edits)

    assert store.snapshot() == once


def test_resubmission_keeps_students_it_omits(ledger):
    ledger.commit("E#00001", D, {"S1": "absent", "S2": "absent"})
    ledger.commit("E#00001", D, {"S1": "present"})

    assert ledger.load_for_editing("E#00001", D) == {"S1": P, "S2": A, "S3": P}


def test_commit_with_unknown_student_writes_nothing(ledger, store):
    ledger.commit("E#00001", D, {"S1": "absent"})
    before = store.snapshot()

    with pytest.raises(UnknownStudentError) as exc:
        ledger.commit("E#00001", D, {"S1": "present", "Sx": "present"})

    assert exc.value.student_ids == ["Sx"]
    assert store.snapshot() == before
    assert ledger.load_for_editing("E#00001", D)["S1"] == A


def test_commit_rejects_student_of_another_cohort(ledger, store):
    with pytest.raises(UnknownStudentError):
        ledger.commit("E#00001", D, {"X1": "present"})
    assert store.upsert_calls == 0


def test_commit_rejects_removed_student_but_keeps_history(ledger, roster, store):
    ledger.commit("E#00001", D, {"S3": "absent"})
    roster.remove("S3")

    with pytest.raises(UnknownStudentError):
        ledger.commit("E#00001", date(2024, 1, 11), {"S3": "present"})

    assert "S3" not in ledger.load_for_editing("E#00001", D)
    assert store.get_by_date("E#00001", D) == {"S3": A}


def test_commit_with_invalid_status_writes_nothing(ledger, store):
    with pytest.raises(InvalidStatusError):
        ledger.commit("E#00001", D, {"S1": "absent", "S2": "late"})
    assert store.snapshot() == {}


def test_commit_unknown_cohort(ledger):
    with pytest.raises(NotFoundError):
        ledger.commit("E#99999", D, {"S1": "present"})


def test_load_for_editing_unknown_cohort(ledger):
    with pytest.raises(NotFoundError):
        ledger.load_for_editing("E#99999", D)


@pytest.mark.parametrize("bad", ["2024-02-30", "10/01/2024", "", None])
def test_invalid_dates_are_rejected(ledger, bad):
    with pytest.raises(InvalidDateError):
        ledger.load_for_editing("E#00001", bad)
    with pytest.raises(InvalidDateError):
        ledger.commit("E#00001", bad, {"S1": "present"})


def test_commit_accepts_iso_string_date(ledger):
    ledger.commit("E#00001", "2024-01-10", {"S2": "absent"})
    assert ledger.load_for_editing("E#00001", D)["S2"] == A


def test_empty_commit_is_a_noop(ledger, store):
    assert ledger.commit("E#00001", D, {}) == 0
    assert store.snapshot() == {}


def test_summary_counts_editing_view(ledger):
    ledger.commit("E#00001", D, {"S3": "absent"})

    summary = ledger.summarize("E#00001", D)

    assert (summary.present, summary.absent, summary.total) == (2, 1, 3)


def test_summary_reuses_a_loaded_view(ledger):
    view = ledger.load_for_editing("E#00001", D)
    ledger.commit("E#00001", D, {"S1": "absent"})

    summary = ledger.summarize("E#00001", D, view=view)

    assert summary.to_dict() == {"present": 3, "absent": 0, "total": 3}
