from datetime import datetime

import pytest

from securepos.errors import Forbidden

from conftest import ADMIN, CASHIER, SECOND_ADMIN


def test_user_counts_by_role(staffed_ledger):
    staffed_ledger.identities.grant(SECOND_ADMIN, "admin", ADMIN)

    users = staffed_ledger.stats(ADMIN)["users"]
    assert users == {"total": 4, "admins": 2, "auditors": 1, "cashiers": 1}


def test_this_month_counts_by_submission_time(staffed_ledger, clock):
    clock.current = datetime(2023, 12, 31, 23, 59, 0)
    staffed_ledger.sales.submit("S1", "2023-12-31", "a" * 64, CASHIER)

    clock.current = datetime(2024, 1, 2, 8, 0, 0)
    staffed_ledger.sales.submit("S1", "2024-01-01", "b" * 64, CASHIER)
    staffed_ledger.sales.submit("S2", "2024-01-01", "c" * 64, CASHIER)

    stats = staffed_ledger.stats(ADMIN, now=datetime(2024, 1, 20, 12, 0, 0))
    assert stats["sales_records"] == {"total": 3, "this_month": 2}
    assert stats["system_health"]["status"] == "healthy"
    assert stats["system_health"]["last_update"] == "2024-01-20T12:00:00"


def test_same_month_of_another_year_is_excluded(staffed_ledger, clock):
    clock.current = datetime(2023, 1, 10, 10, 0, 0)
    staffed_ledger.sales.submit("S1", "2023-01-10", "a" * 64, CASHIER)

    stats = staffed_ledger.stats(ADMIN, now=datetime(2024, 1, 10, 10, 0, 0))
    assert stats["sales_records"]["this_month"] == 0


def test_stats_require_admin(staffed_ledger):
    with pytest.raises(Forbidden):
        staffed_ledger.stats(CASHIER)
