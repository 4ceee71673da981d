from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class AdvanceRecord:
    """Cash advance paid to a labourer. Append-only and not tied to a site."""

    advance_id: int
    labourer_id: int
    amount: Decimal
    advance_date: date
    notes: Optional[str] = None
    created_by: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "advance_id": self.advance_id,
            "labourer_id": self.labourer_id,
            "amount": float(self.amount),
            "date": self.advance_date.strftime("%Y-%m-%d"),
            "notes": self.notes,
            "created_by": self.created_by,
        }
