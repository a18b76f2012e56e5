"""
Admin Action Log — Append-only record of role grants and revocations.
"""
import logging
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.orm import Session

from securepos.models.admin_action import AdminAction, ACTION_GRANT, ACTION_REVOKE
from securepos.store import RecordStore

logger = logging.getLogger(__name__)


class AdminActionLog:
    """Writes an entry after every successful grant / revoke."""

    ACTIONS = (ACTION_GRANT, ACTION_REVOKE)

    def __init__(self, store: RecordStore, clock: Callable[[], datetime] = datetime.now):
        self._store = store
        self._clock = clock

    def record(
        self,
        action: str,
        actor_address: str,
        target_address: str,
        role: Optional[str] = None,
        db: Optional[Session] = None,
    ) -> AdminAction:
        """Append one entry; pass ``db`` to write it in the caller's transaction."""
        if action not in self.ACTIONS:
            raise ValueError(f"Unknown admin action '{action}'")

        entry = AdminAction(
            action=action,
            actor_address=actor_address,
            target_address=target_address,
            role=role if action == ACTION_GRANT else None,
            timestamp=self._clock(),
        )
        self._store.append(entry, db=db)
        logger.info("Admin action %s: %s -> %s (%s)", action, actor_address, target_address, role or "-")
        return entry

    def entries(self) -> list[AdminAction]:
        """All entries, newest first."""
        return self._store.all(AdminAction, AdminAction.timestamp.desc(), AdminAction.id.desc())
