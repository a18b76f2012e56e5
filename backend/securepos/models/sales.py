"""
Sales Record Model — One immutable digest per (store, date).
The unique constraint is the atomic check-and-insert for concurrent submits.
"""
from sqlalchemy import Column, String, Integer, DateTime, UniqueConstraint

from securepos.database import Base


class SalesRecord(Base):
    __tablename__ = "sales_records"
    __table_args__ = (UniqueConstraint("store_id", "date", name="uq_sales_store_date"),)

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    store_id = Column(String(64), nullable=False, index=True)
    date = Column(String(32), nullable=False)

    digest = Column(String(128), nullable=False)       # Hex content hash of the submitted file
    submitted_by = Column(String(64), nullable=False, index=True)
    submitted_at = Column(DateTime, nullable=False)

    # Upload metadata, informational only
    file_name = Column(String(256))
    file_size = Column(Integer)

