"""
Role Routes — Public role lookup.
"""
from typing import Optional

from fastapi import APIRouter, Depends

from securepos.deps import get_ledger
from securepos.schemas.schemas import RoleLookupResponse
from securepos.services.ledger import AuditLedger

router = APIRouter(prefix="/api/roles", tags=["Roles"])


@router.get("/{address}", response_model=RoleLookupResponse)
def get_role(address: str, role: Optional[str] = None, ledger: AuditLedger = Depends(get_ledger)):
    """Current role of an address; pass ``?role=`` to also get a has-role answer."""
    current = ledger.identities.role_of(address)
    return RoleLookupResponse(
        address=address,
        role=current,
        has_role=(current == role) if role else None,
    )
