"""
Admin Routes — Role management, ledger-wide views and dashboard statistics.
"""
from fastapi import APIRouter, Body, Depends

from securepos.config import Settings
from securepos.deps import get_app_settings, get_ledger, require_role
from securepos.errors import InvalidRole, MissingFields
from securepos.models.identity import ROLES, ROLE_ADMIN
from securepos.schemas.schemas import (
    ApiResponse, AddUserRequest, RemoveUserRequest, IdentityEntry,
    SalesRecordEntry, AuditEventEntry, AdminActionEntry, ActivityLogs, StatsResponse,
)
from securepos.services.ledger import AuditLedger
from securepos.utils.validators import require_address

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.post("/add-user", response_model=ApiResponse)
def add_user(
    payload: AddUserRequest,
    caller: str = Depends(require_role(ROLE_ADMIN)),
    ledger: AuditLedger = Depends(get_ledger),
    settings: Settings = Depends(get_app_settings),
):
    """Grant a role to an address, replacing any role it already holds."""
    if not payload.user_address or not payload.role:
        raise MissingFields(["userAddress", "role"], "User address and role are required")
    if payload.role not in ROLES:
        raise InvalidRole()
    require_address(payload.user_address, settings.ADDRESS_PREFIX, settings.ADDRESS_LENGTH)

    identity = ledger.identities.grant(payload.user_address, payload.role, caller)

    return ApiResponse(
        message=f"User added to {payload.role} role successfully",
        data=IdentityEntry.model_validate(identity),
    )


@router.delete("/remove-user", response_model=ApiResponse)
def remove_user(
    payload: RemoveUserRequest = Body(...),
    caller: str = Depends(require_role(ROLE_ADMIN)),
    ledger: AuditLedger = Depends(get_ledger),
):
    """Remove an address from the registry. The last admin cannot be removed."""
    if not payload.user_address:
        raise MissingFields(["userAddress"], "User address is required")

    ledger.identities.revoke(payload.user_address, caller)
    return ApiResponse(message="User removed successfully")


@router.get("/users", response_model=ApiResponse)
def list_users(
    caller: str = Depends(require_role(ROLE_ADMIN)),
    ledger: AuditLedger = Depends(get_ledger),
):
    identities = ledger.identities.list_identities()
    return ApiResponse(data=[IdentityEntry.model_validate(i) for i in identities])


@router.get("/sales", response_model=ApiResponse)
def list_sales_records(
    caller: str = Depends(require_role(ROLE_ADMIN)),
    ledger: AuditLedger = Depends(get_ledger),
):
    """Every sales record regardless of submitter."""
    records = ledger.sales.list_all(caller)
    return ApiResponse(message="Records retrieved", data=[SalesRecordEntry.model_validate(r) for r in records])


@router.get("/logs", response_model=ApiResponse)
def get_activity_logs(
    caller: str = Depends(require_role(ROLE_ADMIN)),
    ledger: AuditLedger = Depends(get_ledger),
):
    """Submissions, verifications and admin actions, each newest first."""
    activity = ledger.activity(caller)
    logs = ActivityLogs(
        sales_submissions=[SalesRecordEntry.model_validate(r) for r in activity["sales_submissions"]],
        audit_logs=[AuditEventEntry.from_event(e) for e in activity["audit_logs"]],
        admin_actions=[AdminActionEntry.model_validate(a) for a in activity["admin_actions"]],
    )
    return ApiResponse(data=logs)


@router.get("/stats", response_model=ApiResponse)
def get_stats(
    caller: str = Depends(require_role(ROLE_ADMIN)),
    ledger: AuditLedger = Depends(get_ledger),
):
    """Aggregated counts for the admin dashboard."""
    return ApiResponse(data=StatsResponse(**ledger.stats(caller)))
