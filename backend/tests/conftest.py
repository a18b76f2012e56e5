from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from securepos.config import Settings
from securepos.main import create_app
from securepos.services.ledger import AuditLedger

# 41-character addresses with the "lsk" prefix
ADMIN = "lsk" + "a" * 38
SECOND_ADMIN = "lsk" + "b" * 38
CASHIER = "lsk" + "c" * 38
OTHER_CASHIER = "lsk" + "e" * 38
AUDITOR = "lsk" + "d" * 38
OTHER_AUDITOR = "lsk" + "f" * 38
STRANGER = "lsk" + "z" * 38


class TickingClock:
    """Returns ``start``, then advances by ``step`` on every call."""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


@pytest.fixture
def clock():
    return TickingClock(datetime(2024, 1, 15, 9, 0, 0))


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'ledger.db'}",
        ADMIN_ADDRESS=ADMIN,
        STORAGE_PATH=str(tmp_path / "storage"),
        LOG_DIR=str(tmp_path / "logs"),
    )


@pytest.fixture
def ledger(settings, clock):
    ledger = AuditLedger.from_settings(settings, clock=clock)
    yield ledger
    ledger.close()


@pytest.fixture
def staffed_ledger(ledger):
    """Ledger with one cashier and one auditor granted by the genesis admin."""
    ledger.identities.grant(CASHIER, "cashier", ADMIN)
    ledger.identities.grant(AUDITOR, "auditor", ADMIN)
    return ledger


@pytest.fixture
def client(settings, staffed_ledger):
    app = create_app(settings, ledger=staffed_ledger)
    with TestClient(app) as test_client:
        yield test_client


def as_caller(address: str) -> dict:
    return {"x-wallet-address": address}
