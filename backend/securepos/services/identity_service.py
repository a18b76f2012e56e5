"""
Identity Store — Wallet address to role mapping.

Single source of truth for authorization decisions. Every grant / revoke runs
in one write transaction: the actor check, the last-admin guard, the write and
its admin log entry commit together or not at all. The guard is also part of
the ``UPDATE/DELETE`` statement itself, so two ledgers sharing a database
cannot both remove an admin and leave none.
"""
import logging
import threading
from datetime import datetime
from functools import partial
from typing import Callable, Optional

from sqlalchemy import and_, func, not_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, aliased

from securepos.errors import InvalidRole, LastAdminError, LedgerError, NotFoundError
from securepos.models.identity import Identity, ROLES, ROLE_ADMIN
from securepos.models.admin_action import ACTION_GRANT, ACTION_REVOKE
from securepos.services.admin_log import AdminActionLog
from securepos.services.authorization import AuthorizationGuard
from securepos.store import RecordStore

logger = logging.getLogger(__name__)

MAX_WRITE_ATTEMPTS = 3


def not_last_admin():
    """SQL clause that is false for the only remaining admin row."""
    admins = aliased(Identity)
    admin_count = (
        select(func.count())
        .select_from(admins)
        .where(admins.role == ROLE_ADMIN)
        .scalar_subquery()
    )
    return not_(and_(Identity.role == ROLE_ADMIN, admin_count <= 1))


class IdentityStore:
    """Role registry with admin-gated grant / revoke."""

    def __init__(
        self,
        store: RecordStore,
        admin_log: Optional[AdminActionLog] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._store = store
        self._admin_log = admin_log
        self._clock = clock
        self._lock = threading.Lock()
        self.guard = AuthorizationGuard(self.role_of)

    # ─── Reads (public) ─────────────────────────────────────────────────

    def role_of(self, address: str, db: Optional[Session] = None) -> Optional[str]:
        identity = self._store.get(Identity, address, db=db)
        return identity.role if identity else None

    def has_role(self, address: str, role: str) -> bool:
        return self.role_of(address) == role

    def get(self, address: str) -> Optional[Identity]:
        return self._store.get(Identity, address)

    def list_identities(self) -> list[Identity]:
        """All identities in grant order."""
        return self._store.all(Identity, Identity.granted_at.asc(), Identity.address.asc())

    def count_admins(self) -> int:
        return self._store.count(Identity, role=ROLE_ADMIN)

    # ─── Genesis ────────────────────────────────────────────────────────

    def seed(self, address: str, role: str = ROLE_ADMIN, added_by: Optional[str] = None) -> bool:
        """Insert an identity without authorization; existing addresses are left untouched.

        Used for the deployer (genesis admin) and optional demo users only.
        """
        if role not in ROLES:
            raise InvalidRole()
        identity = Identity(
            address=address,
            role=role,
            added_by=added_by or address,
            granted_at=self._clock(),
        )
        with self._lock:
            inserted = self._store.compare_and_insert(identity)
        if inserted:
            logger.info("Seeded %s as %s", address, role)
        return inserted

    # ─── Mutations (admin only) ─────────────────────────────────────────

    def grant(self, target_address: str, role: str, actor_address: str) -> Identity:
        """Assign ``role`` to ``target_address``, replacing any prior role.

        Raises:
            Unauthenticated / Forbidden: actor is not an admin.
            InvalidRole: role not in admin / auditor / cashier.
            LastAdminError: the grant would demote the only remaining admin.
        """
        for _ in range(MAX_WRITE_ATTEMPTS):
            try:
                with self._lock, self._store.write_session() as db:
                    self._authorize_admin(db, actor_address)

                    if role not in ROLES:
                        raise InvalidRole()

                    identity = self._upsert(db, target_address, role, actor_address)

                    if self._admin_log is not None:
                        self._admin_log.record(ACTION_GRANT, actor_address, target_address, role, db=db)
            except IntegrityError:
                logger.debug("Insert of %s collided with another writer; retrying", target_address)
                continue

            logger.info("Granted %s to %s (by %s)", role, target_address, actor_address)
            return identity

        raise LedgerError(f"Identity {target_address} changed concurrently; retry the grant")

    def revoke(self, target_address: str, actor_address: str) -> None:
        """Remove ``target_address`` from the registry.

        Raises:
            Unauthenticated / Forbidden: actor is not an admin.
            NotFoundError: target holds no role.
            LastAdminError: target is the only remaining admin.
        """
        with self._lock, self._store.write_session() as db:
            self._authorize_admin(db, actor_address)

            existing = self._store.get(Identity, target_address, db=db)
            if existing is None:
                raise NotFoundError()

            deleted = self._store.delete_where(
                Identity,
                key={"address": target_address},
                guard=(not_last_admin(),),
                db=db,
            )
            if not deleted:
                if existing.role == ROLE_ADMIN:
                    raise LastAdminError()
                raise NotFoundError()

            if self._admin_log is not None:
                self._admin_log.record(ACTION_REVOKE, actor_address, target_address, db=db)

        logger.info("Revoked %s (by %s)", target_address, actor_address)

    # ─── Internals ──────────────────────────────────────────────────────

    def _authorize_admin(self, db: Session, actor_address: str) -> None:
        self._store.lock_rows(db, Identity, role=ROLE_ADMIN)
        AuthorizationGuard(partial(self.role_of, db=db)).authorize(actor_address, ROLE_ADMIN)

    def _upsert(self, db: Session, target_address: str, role: str, actor_address: str) -> Identity:
        now = self._clock()
        existing = self._store.get(Identity, target_address, db=db)

        if existing is None:
            identity = Identity(address=target_address, role=role, added_by=actor_address, granted_at=now)
            db.add(identity)
            db.flush()
            return identity

        demoting = existing.role == ROLE_ADMIN and role != ROLE_ADMIN
        if demoting and self._store.count(Identity, db=db, role=ROLE_ADMIN) <= 1:
            raise LastAdminError("Cannot demote the last remaining admin")

        updated = self._store.cas_update(
            Identity,
            key={"address": target_address},
            expected={"role": existing.role},
            values={"role": role, "added_by": actor_address, "granted_at": now},
            guard=(not_last_admin(),) if role != ROLE_ADMIN else (),
            db=db,
        )
        if not updated:
            if demoting:
                raise LastAdminError("Cannot demote the last remaining admin")
            raise LedgerError(f"Identity {target_address} changed concurrently; retry the grant")

        db.refresh(existing)
        return existing
