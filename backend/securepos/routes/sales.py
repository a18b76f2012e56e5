"""
Sales Routes — Cashier submissions and public digest lookup.
"""
from fastapi import APIRouter, Depends, File, Form, UploadFile

from securepos.config import Settings
from securepos.deps import get_app_settings, get_ledger, require_role
from securepos.errors import MissingFields, RecordNotFoundError
from securepos.models.identity import ROLE_CASHIER
from securepos.schemas.schemas import ApiResponse, SalesRecordEntry
from securepos.services.ledger import AuditLedger
from securepos.services.sales_ledger import require_fields
from securepos.utils.storage import remove_file, save_upload
from securepos.utils.validators import validate_upload

router = APIRouter(prefix="/api", tags=["Sales"])


def read_upload(upload: UploadFile | None, settings: Settings, field: str) -> bytes:
    """Read an uploaded file, enforcing the extension allow-list and size cap."""
    if upload is None:
        raise MissingFields([field], "No file uploaded")

    # One byte over the cap is enough to reject
    data = upload.file.read(settings.MAX_UPLOAD_BYTES + 1)
    validate_upload(upload.filename, len(data), settings.ALLOWED_EXTENSIONS, settings.MAX_UPLOAD_BYTES)
    return data


@router.post("/submit-sales", response_model=ApiResponse)
def submit_sales(
    sales_file: UploadFile | None = File(None, alias="salesFile"),
    store_id: str | None = Form(None, alias="storeId"),
    date: str | None = Form(None),
    caller: str = Depends(require_role(ROLE_CASHIER)),
    ledger: AuditLedger = Depends(get_ledger),
    settings: Settings = Depends(get_app_settings),
):
    """Hash a daily sales file and record the digest for (store, date)."""
    data = read_upload(sales_file, settings, "salesFile")
    require_fields(storeId=store_id, date=date)

    stored_path = save_upload(settings.STORAGE_PATH, sales_file.filename, data) if settings.KEEP_UPLOADS else None

    try:
        record = ledger.submit_file(store_id, date, data, caller, file_name=sales_file.filename)
    except Exception:
        # Failed submissions leave nothing on disk
        if stored_path:
            remove_file(stored_path)
        raise

    return ApiResponse(
        success=True,
        message="Sales file submitted successfully",
        data=SalesRecordEntry.model_validate(record),
    )


@router.get("/submissions", response_model=ApiResponse)
def list_submissions(
    caller: str = Depends(require_role(ROLE_CASHIER)),
    ledger: AuditLedger = Depends(get_ledger),
):
    """Submission history for the calling cashier (newest first)."""
    records = ledger.sales.list_by_submitter(caller)
    return ApiResponse(data=[SalesRecordEntry.model_validate(r) for r in records])


@router.get("/sales/{store_id}/{date}", response_model=ApiResponse)
def get_sales_hash(store_id: str, date: str, ledger: AuditLedger = Depends(get_ledger)):
    """Public lookup of the digest recorded for a store and date."""
    record = ledger.sales.lookup(store_id, date)
    if record is None:
        raise RecordNotFoundError("No sales record found")
    return ApiResponse(message="Record found", data=SalesRecordEntry.model_validate(record))
