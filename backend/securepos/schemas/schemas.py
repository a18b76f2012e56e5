"""
Pydantic Schemas — Request & Response models for API validation.
"""
from datetime import datetime
from typing import Any, Optional, Dict, List
from pydantic import BaseModel, ConfigDict, Field


# ──────────────── Generic ────────────────

class ApiResponse(BaseModel):
    success: bool = True
    message: str = ""
    data: Any = None


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error_code: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    timestamp: datetime
    uptime_seconds: float


# ──────────────── Identity ────────────────

class AddUserRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_address: Optional[str] = Field(None, alias="userAddress", description="Wallet address to grant")
    role: Optional[str] = Field(None, description="admin | auditor | cashier")


class RemoveUserRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_address: Optional[str] = Field(None, alias="userAddress", description="Wallet address to revoke")


class IdentityEntry(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    address: str
    role: str
    added_by: str
    granted_at: datetime


class RoleLookupResponse(BaseModel):
    address: str
    role: Optional[str] = None
    has_role: Optional[bool] = None


# ──────────────── Sales ────────────────

class SalesRecordEntry(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    store_id: str
    date: str
    digest: str
    submitted_by: str
    submitted_at: datetime
    file_name: Optional[str] = None
    file_size: Optional[int] = None


# ──────────────── Audit ────────────────

class OriginalSubmission(BaseModel):
    submitted_by: str
    submitted_at: datetime


class AuditEventEntry(BaseModel):
    id: int
    store_id: str
    date: str
    uploaded_digest: str
    stored_digest: str
    hash_match: bool
    original_submission: OriginalSubmission
    audited_by: str
    audited_at: datetime
    file_name: Optional[str] = None
    file_size: Optional[int] = None

    @classmethod
    def from_event(cls, event) -> "AuditEventEntry":
        return cls(
            id=event.id,
            store_id=event.store_id,
            date=event.date,
            uploaded_digest=event.uploaded_digest,
            stored_digest=event.stored_digest,
            hash_match=event.hash_match,
            original_submission=OriginalSubmission(
                submitted_by=event.submitted_by,
                submitted_at=event.submitted_at,
            ),
            audited_by=event.audited_by,
            audited_at=event.audited_at,
            file_name=event.file_name,
            file_size=event.file_size,
        )


# ──────────────── Admin ────────────────

class AdminActionEntry(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    action: str
    actor_address: str
    target_address: str
    role: Optional[str] = None
    timestamp: datetime


class ActivityLogs(BaseModel):
    sales_submissions: List[SalesRecordEntry]
    audit_logs: List[AuditEventEntry]
    admin_actions: List[AdminActionEntry]


class UserStats(BaseModel):
    total: int
    admins: int
    auditors: int
    cashiers: int


class StatsResponse(BaseModel):
    users: UserStats
    sales_records: Dict[str, int]
    system_health: Dict[str, Any]
