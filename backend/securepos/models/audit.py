"""
Audit Event Model — Immutable record of one verification attempt.
Captures both digests, the match outcome, and a reference to the original submission.
"""
from sqlalchemy import Column, String, Integer, DateTime, Boolean

from securepos.database import Base


class AuditEvent(Base):
    __tablename__ = "audit_events"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)

    store_id = Column(String(64), nullable=False, index=True)
    date = Column(String(32), nullable=False)

    uploaded_digest = Column(String(128), nullable=False)
    stored_digest = Column(String(128), nullable=False)
    hash_match = Column(Boolean, nullable=False)

    # Original submission, copied at verification time
    submitted_by = Column(String(64), nullable=False)
    submitted_at = Column(DateTime, nullable=False)

    audited_by = Column(String(64), nullable=False, index=True)
    audited_at = Column(DateTime, nullable=False)

    file_name = Column(String(256))
    file_size = Column(Integer)

