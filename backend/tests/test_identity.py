import pytest

from securepos.errors import Forbidden, InvalidRole, LastAdminError, NotFoundError, Unauthenticated
from securepos.services.ledger import AuditLedger

from conftest import ADMIN, AUDITOR, CASHIER, SECOND_ADMIN, STRANGER


def test_genesis_admin_is_seeded(ledger):
    identity = ledger.identities.get(ADMIN)
    assert identity.role == "admin"
    assert identity.added_by == ADMIN
    assert ledger.identities.count_admins() == 1


def test_bootstrap_does_not_reseed_when_admin_exists(ledger, settings, clock):
    other = settings.model_copy(update={"ADMIN_ADDRESS": STRANGER})
    reopened = AuditLedger.from_settings(other, clock=clock)
    try:
        assert reopened.identities.role_of(STRANGER) is None
        assert reopened.identities.role_of(ADMIN) == "admin"
    finally:
        reopened.close()


def test_demo_users_seeded_on_request(settings, clock):
    demo = settings.model_copy(update={"SEED_DEMO_USERS": True})
    ledger = AuditLedger.from_settings(demo, clock=clock)
    try:
        roles = sorted(i.role for i in ledger.identities.list_identities())
        assert roles == ["admin", "auditor", "cashier"]
    finally:
        ledger.close()


def test_grant_then_revoke(ledger):
    ledger.identities.grant(CASHIER, "cashier", ADMIN)
    assert ledger.identities.role_of(CASHIER) == "cashier"
    assert ledger.identities.has_role(CASHIER, "cashier")

    ledger.identities.revoke(CASHIER, ADMIN)
    assert ledger.identities.role_of(CASHIER) is None


def test_regrant_replaces_role(ledger):
    ledger.identities.grant(CASHIER, "cashier", ADMIN)
    identity = ledger.identities.grant(CASHIER, "auditor", ADMIN)

    assert identity.role == "auditor"
    assert ledger.identities.role_of(CASHIER) == "auditor"
    assert len(ledger.identities.list_identities()) == 2


def test_grant_rejects_unknown_role(ledger):
    with pytest.raises(InvalidRole):
        ledger.identities.grant(CASHIER, "manager", ADMIN)
    assert ledger.identities.role_of(CASHIER) is None


def test_grant_requires_admin(ledger):
    ledger.identities.grant(CASHIER, "cashier", ADMIN)

    with pytest.raises(Forbidden):
        ledger.identities.grant(AUDITOR, "auditor", CASHIER)
    with pytest.raises(Unauthenticated):
        ledger.identities.grant(AUDITOR, "auditor", STRANGER)


def test_revoke_unknown_address_is_not_found(ledger):
    with pytest.raises(NotFoundError):
        ledger.identities.revoke(STRANGER, ADMIN)


def test_last_admin_cannot_revoke_itself(ledger):
    with pytest.raises(LastAdminError):
        ledger.identities.revoke(ADMIN, ADMIN)
    assert ledger.identities.role_of(ADMIN) == "admin"


def test_last_admin_cannot_be_demoted(ledger):
    with pytest.raises(LastAdminError):
        ledger.identities.grant(ADMIN, "cashier", ADMIN)
    assert ledger.identities.role_of(ADMIN) == "admin"


def test_admin_may_leave_when_another_admin_remains(ledger):
    ledger.identities.grant(SECOND_ADMIN, "admin", ADMIN)
    ledger.identities.revoke(ADMIN, ADMIN)

    assert ledger.identities.role_of(ADMIN) is None
    assert ledger.identities.count_admins() == 1
    with pytest.raises(LastAdminError):
        ledger.identities.revoke(SECOND_ADMIN, SECOND_ADMIN)


def test_list_identities_in_grant_order(ledger):
    ledger.identities.grant(CASHIER, "cashier", ADMIN)
    ledger.identities.grant(AUDITOR, "auditor", ADMIN)

    assert [i.address for i in ledger.identities.list_identities()] == [ADMIN, CASHIER, AUDITOR]


def test_seed_leaves_existing_identity_untouched(ledger):
    assert ledger.identities.seed(ADMIN, "cashier") is False
    assert ledger.identities.role_of(ADMIN) == "admin"


def test_grant_rolls_back_when_log_write_fails(ledger, monkeypatch):
    def broken_record(*args, **kwargs):
        raise RuntimeError("log unavailable")

    monkeypatch.setattr(ledger.admin_log, "record", broken_record)

    with pytest.raises(RuntimeError):
        ledger.identities.grant(CASHIER, "cashier", ADMIN)

    assert ledger.identities.role_of(CASHIER) is None
    monkeypatch.undo()
    assert ledger.admin_log.entries() == []


def test_revoke_rolls_back_when_log_write_fails(staffed_ledger, monkeypatch):
    def broken_record(*args, **kwargs):
        raise RuntimeError("log unavailable")

    monkeypatch.setattr(staffed_ledger.admin_log, "record", broken_record)

    with pytest.raises(RuntimeError):
        staffed_ledger.identities.revoke(CASHIER, ADMIN)

    assert staffed_ledger.identities.role_of(CASHIER) == "cashier"
    monkeypatch.undo()
    assert len(staffed_ledger.admin_log.entries()) == 2
