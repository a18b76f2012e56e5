import hashlib

import pytest

from securepos.errors import Forbidden, RecordNotFoundError, Unauthenticated

from conftest import ADMIN, AUDITOR, CASHIER, OTHER_AUDITOR, STRANGER

B1 = b"register,total\n1,980.10\n2,411.00\n"
B2 = b"register,total\n1,980.10\n2,411.01\n"


@pytest.fixture
def submitted(staffed_ledger):
    staffed_ledger.submit_file("S1", "2024-01-01", B1, CASHIER)
    return staffed_ledger


def test_matching_file_records_a_passing_event(submitted):
    event = submitted.audit.record_verification("S1", "2024-01-01", hashlib.sha256(B1).hexdigest(), AUDITOR)

    assert event.hash_match is True
    assert event.stored_digest == event.uploaded_digest
    assert event.submitted_by == CASHIER
    assert event.audited_by == AUDITOR
    assert event.audited_at > event.submitted_at
    assert len(submitted.audit.events()) == 1


def test_mismatch_is_recorded_not_raised(submitted):
    submitted.verify_file("S1", "2024-01-01", B1, AUDITOR)
    event = submitted.verify_file("S1", "2024-01-01", B2, AUDITOR, file_name="recount.csv")

    assert event.hash_match is False
    assert event.uploaded_digest == hashlib.sha256(B2).hexdigest()
    assert event.stored_digest == hashlib.sha256(B1).hexdigest()
    assert event.file_name == "recount.csv"
    assert len(submitted.audit.events()) == 2

    # The sales record itself is untouched
    assert submitted.sales.lookup("S1", "2024-01-01").digest == hashlib.sha256(B1).hexdigest()


def test_reverification_appends_each_time(submitted):
    for _ in range(3):
        submitted.verify_file("S1", "2024-01-01", B1, AUDITOR)
    assert len(submitted.audit.events()) == 3


def test_missing_submission_raises_and_creates_nothing(submitted):
    with pytest.raises(RecordNotFoundError):
        submitted.verify_file("S1", "2024-02-01", B1, AUDITOR)

    assert submitted.sales.lookup("S1", "2024-02-01") is None
    assert submitted.audit.events() == []


@pytest.mark.parametrize("caller, error", [
    (ADMIN, Forbidden),
    (CASHIER, Forbidden),
    (STRANGER, Unauthenticated),
])
def test_only_auditors_verify(submitted, caller, error):
    with pytest.raises(error):
        submitted.verify_file("S1", "2024-01-01", B1, caller)
    assert submitted.audit.events() == []


def test_history_is_scoped_to_auditor_newest_first(submitted):
    submitted.identities.grant(OTHER_AUDITOR, "auditor", ADMIN)
    submitted.verify_file("S1", "2024-01-01", B1, AUDITOR)
    submitted.verify_file("S1", "2024-01-01", B2, OTHER_AUDITOR)
    submitted.verify_file("S1", "2024-01-01", B2, AUDITOR)

    history = submitted.audit.history(AUDITOR)
    assert [e.hash_match for e in history] == [False, True]
    assert all(e.audited_by == AUDITOR for e in history)

    with pytest.raises(Forbidden):
        submitted.audit.history(CASHIER)
