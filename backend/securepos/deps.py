"""
Request Dependencies — Caller identity and role gating for routes.

The caller is whoever the ``x-wallet-address`` header names; the address is
checked for shape only and is not cryptographically verified.
"""
from fastapi import Depends, Header, Request

from securepos.config import Settings
from securepos.errors import Unauthenticated
from securepos.services.ledger import AuditLedger
from securepos.utils.validators import require_address


def get_ledger(request: Request) -> AuditLedger:
    return request.app.state.ledger


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_caller(
    x_wallet_address: str | None = Header(None, alias="x-wallet-address"),
    settings: Settings = Depends(get_app_settings),
) -> str:
    """Resolve the caller's address from the request header."""
    if not x_wallet_address:
        raise Unauthenticated("Wallet address required")
    return require_address(x_wallet_address, settings.ADDRESS_PREFIX, settings.ADDRESS_LENGTH)


def require_role(role: str):
    """
    Dependency factory gating a route on an exact role.
    Example: Depends(require_role("cashier"))
    """
    def checker(caller: str = Depends(get_caller), ledger: AuditLedger = Depends(get_ledger)) -> str:
        ledger.guard.authorize(caller, role)
        return caller

    return checker
