import pytest

from securepos.errors import Forbidden, LastAdminError, NotFoundError

from conftest import ADMIN, AUDITOR, CASHIER, STRANGER


def test_grant_and_revoke_are_logged_newest_first(ledger):
    ledger.identities.grant(CASHIER, "cashier", ADMIN)
    ledger.identities.revoke(CASHIER, ADMIN)

    entries = ledger.admin_log.entries()
    assert [e.action for e in entries] == ["revoke", "grant"]

    revoke, grant = entries
    assert grant.actor_address == ADMIN
    assert grant.target_address == CASHIER
    assert grant.role == "cashier"
    assert revoke.role is None


def test_failed_operations_are_not_logged(ledger):
    ledger.identities.grant(CASHIER, "cashier", ADMIN)

    with pytest.raises(Forbidden):
        ledger.identities.grant(AUDITOR, "auditor", CASHIER)
    with pytest.raises(NotFoundError):
        ledger.identities.revoke(STRANGER, ADMIN)
    with pytest.raises(LastAdminError):
        ledger.identities.revoke(ADMIN, ADMIN)

    assert len(ledger.admin_log.entries()) == 1


def test_genesis_seed_is_not_an_admin_action(ledger):
    assert ledger.admin_log.entries() == []


def test_unknown_action_rejected(ledger):
    with pytest.raises(ValueError):
        ledger.admin_log.record("promote", ADMIN, CASHIER, "admin")
