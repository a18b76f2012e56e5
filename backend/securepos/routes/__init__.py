from securepos.routes.sales import router as sales_router
from securepos.routes.audit import router as audit_router
from securepos.routes.admin import router as admin_router
from securepos.routes.roles import router as roles_router

__all__ = ["sales_router", "audit_router", "admin_router", "roles_router"]
