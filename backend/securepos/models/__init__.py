from securepos.models.identity import Identity, ROLES, ROLE_ADMIN, ROLE_AUDITOR, ROLE_CASHIER
from securepos.models.sales import SalesRecord
from securepos.models.audit import AuditEvent
from securepos.models.admin_action import AdminAction, ACTION_GRANT, ACTION_REVOKE

__all__ = [
    "Identity", "SalesRecord", "AuditEvent", "AdminAction",
    "ROLES", "ROLE_ADMIN", "ROLE_AUDITOR", "ROLE_CASHIER",
    "ACTION_GRANT", "ACTION_REVOKE",
]
