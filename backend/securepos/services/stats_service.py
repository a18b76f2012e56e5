"""
Stats Service — Derived dashboard metrics over identities and sales records.

Month bucketing compares naive local timestamps against the caller's local
"now"; records near a month boundary are not timezone-normalized.
"""
import time
from datetime import datetime
from typing import Iterable, Optional

from securepos.models.identity import Identity, ROLES
from securepos.models.sales import SalesRecord


class StatsService:
    """Pure computation; holds no state beyond its boot time."""

    def __init__(self, boot_time: Optional[float] = None):
        self.boot_time = boot_time if boot_time is not None else time.time()

    @staticmethod
    def user_counts(identities: Iterable[Identity]) -> dict:
        counts = {"total": 0, **{f"{role}s": 0 for role in ROLES}}
        for identity in identities:
            counts["total"] += 1
            key = f"{identity.role}s"
            if key in counts:
                counts[key] += 1
        return counts

    @staticmethod
    def sales_counts(records: Iterable[SalesRecord], now: datetime) -> dict:
        records = list(records)
        this_month = sum(
            1 for r in records
            if r.submitted_at and r.submitted_at.year == now.year and r.submitted_at.month == now.month
        )
        return {"total": len(records), "this_month": this_month}

    def snapshot(
        self,
        identities: Iterable[Identity],
        records: Iterable[SalesRecord],
        now: datetime,
    ) -> dict:
        return {
            "users": self.user_counts(identities),
            "sales_records": self.sales_counts(records, now),
            "system_health": {
                "status": "healthy",
                "uptime_seconds": round(time.time() - self.boot_time, 1),
                "last_update": now.isoformat(),
            },
        }
