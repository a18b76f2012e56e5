"""
Sales Record Ledger — Insert-once store of daily sales digests keyed by (store, date).

First write wins: a second submission for an existing key is rejected, never
overwritten. The uniqueness check and the insert are one database statement,
so concurrent submitters for the same key cannot both succeed.
"""
import logging
from datetime import datetime
from typing import Callable, Optional

from securepos.errors import DuplicateKeyError, MissingFields
from securepos.models.identity import ROLE_ADMIN, ROLE_CASHIER
from securepos.models.sales import SalesRecord
from securepos.services.authorization import AuthorizationGuard
from securepos.store import RecordStore

logger = logging.getLogger(__name__)


def require_fields(**fields) -> None:
    """Raise MissingFields naming every blank or absent value."""
    missing = [name for name, value in fields.items() if value is None or not str(value).strip()]
    if missing:
        raise MissingFields(missing)


class SalesLedger:

    def __init__(
        self,
        store: RecordStore,
        guard: AuthorizationGuard,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._store = store
        self._guard = guard
        self._clock = clock

    def submit(
        self,
        store_id: str,
        date: str,
        digest: str,
        submitter_address: str,
        file_name: Optional[str] = None,
        file_size: Optional[int] = None,
    ) -> SalesRecord:
        """Record the digest of a cashier's daily sales file.

        Raises:
            Unauthenticated / Forbidden: submitter is not a cashier.
            MissingFields: store_id, date, or digest is blank.
            DuplicateKeyError: (store_id, date) already has a record.
        """
        self._guard.authorize(submitter_address, ROLE_CASHIER)
        require_fields(store_id=store_id, date=date, digest=digest)

        record = SalesRecord(
            store_id=store_id,
            date=date,
            digest=digest,
            submitted_by=submitter_address,
            submitted_at=self._clock(),
            file_name=file_name,
            file_size=file_size,
        )

        if not self._store.compare_and_insert(record):
            logger.warning("Duplicate submission for %s/%s by %s", store_id, date, submitter_address)
            raise DuplicateKeyError()

        logger.info("Sales digest recorded for %s/%s by %s", store_id, date, submitter_address)
        return record

    def lookup(self, store_id: str, date: str) -> Optional[SalesRecord]:
        """Public read; no authorization."""
        return self._store.first(SalesRecord, store_id=store_id, date=date)

    def list_all(self, requester_address: str) -> list[SalesRecord]:
        """Every record regardless of submitter, newest first (admin only)."""
        self._guard.authorize(requester_address, ROLE_ADMIN)
        return self.records()

    def list_by_submitter(self, submitter_address: str) -> list[SalesRecord]:
        """The calling cashier's own submissions, newest first."""
        self._guard.authorize(submitter_address, ROLE_CASHIER)
        return self._store.all(
            SalesRecord,
            SalesRecord.submitted_at.desc(),
            SalesRecord.id.desc(),
            submitted_by=submitter_address,
        )

    def records(self) -> list[SalesRecord]:
        """Unguarded read for derived views that have already authorized the caller."""
        return self._store.all(SalesRecord, SalesRecord.submitted_at.desc(), SalesRecord.id.desc())
