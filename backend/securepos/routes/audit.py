"""
Audit Routes — Auditor re-uploads and verification history.
"""
from fastapi import APIRouter, Depends, File, Form, UploadFile

from securepos.config import Settings
from securepos.deps import get_app_settings, get_ledger, require_role
from securepos.models.identity import ROLE_AUDITOR
from securepos.routes.sales import read_upload
from securepos.schemas.schemas import ApiResponse, AuditEventEntry
from securepos.services.ledger import AuditLedger
from securepos.services.sales_ledger import require_fields

router = APIRouter(prefix="/api", tags=["Audit"])


@router.post("/verify", response_model=ApiResponse)
def verify_sales_file(
    audit_file: UploadFile | None = File(None, alias="auditFile"),
    store_id: str | None = Form(None, alias="storeId"),
    date: str | None = Form(None),
    caller: str = Depends(require_role(ROLE_AUDITOR)),
    ledger: AuditLedger = Depends(get_ledger),
    settings: Settings = Depends(get_app_settings),
):
    """Compare a re-uploaded file against the digest on file. Every attempt is logged."""
    data = read_upload(audit_file, settings, "auditFile")
    require_fields(storeId=store_id, date=date)

    event = ledger.verify_file(store_id, date, data, caller, file_name=audit_file.filename)

    return ApiResponse(
        success=True,
        message="File verification successful" if event.hash_match else "File verification failed",
        data=AuditEventEntry.from_event(event),
    )


@router.get("/audit-history", response_model=ApiResponse)
def audit_history(
    caller: str = Depends(require_role(ROLE_AUDITOR)),
    ledger: AuditLedger = Depends(get_ledger),
):
    """Verification history for the calling auditor (newest first)."""
    events = ledger.audit.history(caller)
    return ApiResponse(data=[AuditEventEntry.from_event(e) for e in events])
