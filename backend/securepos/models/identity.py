"""
Identity Model — Wallet address to role assignment.
Exactly one active role per address; re-granting replaces the role.
"""
from sqlalchemy import Column, String, DateTime

from securepos.database import Base

ROLE_ADMIN = "admin"
ROLE_AUDITOR = "auditor"
ROLE_CASHIER = "cashier"
ROLES = (ROLE_ADMIN, ROLE_AUDITOR, ROLE_CASHIER)


class Identity(Base):
    __tablename__ = "identities"

    address = Column(String(64), primary_key=True, index=True)
    role = Column(String(16), nullable=False, index=True)   # admin | auditor | cashier
    added_by = Column(String(64), nullable=False)           # Grantor address (self for genesis)
    granted_at = Column(DateTime, nullable=False)

