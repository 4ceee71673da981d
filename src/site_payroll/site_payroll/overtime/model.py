from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class OvertimeRecord:
    """Overtime for one labourer on one day. Upserted on (labourer_id, work_date)."""

    labourer_id: int
    site_id: int
    work_date: date
    hours: Decimal
    amount: Decimal
    notes: Optional[str] = None
    created_by: Optional[int] = None
    overtime_id: Optional[int] = None
    labourer_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "overtime_id": self.overtime_id,
            "labourer_id": self.labourer_id,
            "labourer_name": self.labourer_name,
            "site_id": self.site_id,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "hours": float(self.hours),
            "amount": float(self.amount),
            "notes": self.notes,
        }
