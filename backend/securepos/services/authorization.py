"""
Authorization Guard — Single gate for every state-mutating ledger operation.

Exact role match only: there is no hierarchy, so an ``admin`` does not satisfy
a ``cashier`` check.
"""
import logging
from typing import Callable, Optional

from securepos.errors import Unauthenticated, Forbidden

logger = logging.getLogger(__name__)


class AuthorizationGuard:
    """Grants or denies an operation based on the caller's current role."""

    def __init__(self, role_lookup: Callable[[str], Optional[str]]):
        self._role_of = role_lookup

    def authorize(self, address: Optional[str], required_role: str) -> str:
        """Check that ``address`` currently holds exactly ``required_role``.

        Returns:
            The caller's role.

        Raises:
            Unauthenticated: the address holds no role at all.
            Forbidden: the address holds a different role.
        """
        role = self._role_of(address) if address else None

        if role is None:
            logger.warning("Denied %s operation: %s has no role", required_role, address)
            raise Unauthenticated()

        if role != required_role:
            logger.warning("Denied %s operation: %s holds %s", required_role, address, role)
            raise Forbidden(required_role)

        return role
