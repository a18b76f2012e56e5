"""
Admin Action Model — Append-only log of role grants and revocations.
"""
from sqlalchemy import Column, String, Integer, DateTime

from securepos.database import Base

ACTION_GRANT = "grant"
ACTION_REVOKE = "revoke"


class AdminAction(Base):
    __tablename__ = "admin_actions"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    action = Column(String(16), nullable=False)     # grant | revoke
    actor_address = Column(String(64), nullable=False, index=True)
    target_address = Column(String(64), nullable=False)
    role = Column(String(16))                       # Set for grants only
    timestamp = Column(DateTime, nullable=False)

