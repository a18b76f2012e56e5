from securepos.services.authorization import AuthorizationGuard
from securepos.services.identity_service import IdentityStore
from securepos.services.integrity_service import ContentIntegrityEngine
from securepos.services.sales_ledger import SalesLedger
from securepos.services.audit_trail import AuditTrail
from securepos.services.admin_log import AdminActionLog
from securepos.services.stats_service import StatsService
from securepos.services.ledger import AuditLedger

__all__ = [
    "AuthorizationGuard", "IdentityStore", "ContentIntegrityEngine", "SalesLedger",
    "AuditTrail", "AdminActionLog", "StatsService", "AuditLedger",
]
