"""
Audit Ledger — Composition root for identity, authorization, integrity and the three logs.

An ``AuditLedger`` is constructed explicitly and passed by reference; the
FastAPI app keeps one on ``app.state``. Construction seeds the genesis admin
when no admin exists yet.
"""
import logging
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.engine import Engine

from securepos.config import Settings
from securepos.database import create_db_engine, create_session_factory, init_db
from securepos.models.audit import AuditEvent
from securepos.models.identity import ROLE_ADMIN, ROLE_AUDITOR, ROLE_CASHIER
from securepos.models.sales import SalesRecord
from securepos.services.admin_log import AdminActionLog
from securepos.services.audit_trail import AuditTrail
from securepos.services.identity_service import IdentityStore
from securepos.services.integrity_service import ContentIntegrityEngine
from securepos.services.sales_ledger import SalesLedger
from securepos.services.stats_service import StatsService
from securepos.store import RecordStore

logger = logging.getLogger(__name__)

# Demo identities from the development network; only seeded when SEED_DEMO_USERS is set
DEMO_USERS = {
    "lsk2a8h3k9j4m5n6p7q8r9s0t1u2v3w4x5y6z7a8b": ROLE_AUDITOR,
    "lsk3b9i4k0j5m6n7p8q9r0s1t2u3v4w5x6y7z8a9c": ROLE_CASHIER,
}


class AuditLedger:
    """Identity & audit ledger service object."""

    def __init__(
        self,
        store: RecordStore,
        settings: Settings,
        clock: Callable[[], datetime] = datetime.now,
        engine: Optional[Engine] = None,
    ):
        self.settings = settings
        self.store = store
        self.clock = clock
        self.engine = engine

        self.integrity = ContentIntegrityEngine(settings.HASH_ALGORITHM)
        self.admin_log = AdminActionLog(store, clock)
        self.identities = IdentityStore(store, admin_log=self.admin_log, clock=clock)
        self.guard = self.identities.guard
        self.sales = SalesLedger(store, self.guard, clock)
        self.audit = AuditTrail(store, self.guard, self.sales, clock)
        self.stats_service = StatsService()

        self.bootstrap()

    @classmethod
    def from_settings(cls, settings: Settings, clock: Callable[[], datetime] = datetime.now) -> "AuditLedger":
        """Build engine, tables and store from ``settings.DATABASE_URL``."""
        engine = create_db_engine(settings.DATABASE_URL, echo=settings.DEBUG)
        init_db(engine)
        store = RecordStore(create_session_factory(engine))
        return cls(store, settings, clock=clock, engine=engine)

    def bootstrap(self):
        """Seed the deployer as admin if the registry has none."""
        if self.identities.count_admins() == 0:
            self.identities.seed(self.settings.ADMIN_ADDRESS, ROLE_ADMIN)

        if self.settings.SEED_DEMO_USERS:
            for address, role in DEMO_USERS.items():
                self.identities.seed(address, role, added_by=self.settings.ADMIN_ADDRESS)

    def close(self):
        if self.engine is not None:
            self.engine.dispose()

    # ─── File-level operations ──────────────────────────────────────────

    def submit_file(
        self,
        store_id: str,
        date: str,
        data: bytes,
        submitter_address: str,
        file_name: Optional[str] = None,
    ) -> SalesRecord:
        """Digest ``data`` and record it for (store_id, date)."""
        digest = self.integrity.digest(data)
        return self.sales.submit(
            store_id, date, digest, submitter_address,
            file_name=file_name, file_size=len(data),
        )

    def verify_file(
        self,
        store_id: str,
        date: str,
        data: bytes,
        auditor_address: str,
        file_name: Optional[str] = None,
    ) -> AuditEvent:
        """Digest a re-uploaded file and log the comparison against the digest on file."""
        digest = self.integrity.digest(data)
        return self.audit.record_verification(
            store_id, date, digest, auditor_address,
            file_name=file_name, file_size=len(data),
        )

    # ─── Admin views ────────────────────────────────────────────────────

    def activity(self, requester_address: str) -> dict:
        """All submissions, verifications and admin actions, each newest first."""
        self.guard.authorize(requester_address, ROLE_ADMIN)
        return {
            "sales_submissions": self.sales.records(),
            "audit_logs": self.audit.events(),
            "admin_actions": self.admin_log.entries(),
        }

    def stats(self, requester_address: str, now: Optional[datetime] = None) -> dict:
        self.guard.authorize(requester_address, ROLE_ADMIN)
        return self.stats_service.snapshot(
            self.identities.list_identities(),
            self.sales.records(),
            now or self.clock(),
        )
