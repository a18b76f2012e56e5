"""
Audit Trail — Append-only log of verification attempts against recorded sales digests.
"""
import logging
from datetime import datetime
from typing import Callable, Optional

from securepos.errors import RecordNotFoundError
from securepos.models.audit import AuditEvent
from securepos.models.identity import ROLE_AUDITOR
from securepos.services.authorization import AuthorizationGuard
from securepos.services.sales_ledger import SalesLedger, require_fields
from securepos.store import RecordStore

logger = logging.getLogger(__name__)


class AuditTrail:
    """Records every verification; a hash mismatch is a valid outcome, not an error."""

    def __init__(
        self,
        store: RecordStore,
        guard: AuthorizationGuard,
        ledger: SalesLedger,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._store = store
        self._guard = guard
        self._ledger = ledger
        self._clock = clock

    def record_verification(
        self,
        store_id: str,
        date: str,
        uploaded_digest: str,
        auditor_address: str,
        file_name: Optional[str] = None,
        file_size: Optional[int] = None,
    ) -> AuditEvent:
        """Compare ``uploaded_digest`` with the digest on file and append the outcome.

        Not idempotent: every call appends a new event.

        Raises:
            Unauthenticated / Forbidden: caller is not an auditor.
            MissingFields: store_id, date, or uploaded_digest is blank.
            RecordNotFoundError: nothing was submitted for (store_id, date).
        """
        self._guard.authorize(auditor_address, ROLE_AUDITOR)
        require_fields(store_id=store_id, date=date, uploaded_digest=uploaded_digest)

        record = self._ledger.lookup(store_id, date)
        if record is None:
            raise RecordNotFoundError()

        hash_match = uploaded_digest == record.digest

        event = AuditEvent(
            store_id=store_id,
            date=date,
            uploaded_digest=uploaded_digest,
            stored_digest=record.digest,
            hash_match=hash_match,
            submitted_by=record.submitted_by,
            submitted_at=record.submitted_at,
            audited_by=auditor_address,
            audited_at=self._clock(),
            file_name=file_name,
            file_size=file_size,
        )
        self._store.append(event)

        if hash_match:
            logger.info("Verification passed for %s/%s (auditor %s)", store_id, date, auditor_address)
        else:
            logger.warning("Verification FAILED for %s/%s (auditor %s)", store_id, date, auditor_address)
        return event

    def history(self, auditor_address: str) -> list[AuditEvent]:
        """The calling auditor's own verifications, newest first."""
        self._guard.authorize(auditor_address, ROLE_AUDITOR)
        return self._store.all(
            AuditEvent,
            AuditEvent.audited_at.desc(),
            AuditEvent.id.desc(),
            audited_by=auditor_address,
        )

    def events(self) -> list[AuditEvent]:
        """Every verification, newest first. Callers authorize beforehand."""
        return self._store.all(AuditEvent, AuditEvent.audited_at.desc(), AuditEvent.id.desc())
