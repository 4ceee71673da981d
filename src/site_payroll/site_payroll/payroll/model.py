from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

ZERO = Decimal("0")


@dataclass(frozen=True)
class PeriodTotals:
    """Money and day counts for one labourer over one date window."""

    full_days: int = 0
    half_days: int = 0
    absent_days: int = 0
    wage: Decimal = ZERO
    overtime_amount: Decimal = ZERO
    food_allowance_days: int = 0
    food_allowance_amount: Decimal = ZERO
    advance_amount: Decimal = ZERO

    @property
    def net_payable(self) -> Decimal:
        return self.wage + self.overtime_amount + self.food_allowance_amount - self.advance_amount


@dataclass(frozen=True)
class PayrollSummary:
    """Derived per-labourer payroll figures. Never persisted."""

    labourer_id: int
    name: str
    site_id: Optional[int]
    rate: Decimal
    current: PeriodTotals
    previous_balance: Decimal

    @property
    def current_net_payable(self) -> Decimal:
        return self.current.net_payable

    @property
    def total_payable(self) -> Decimal:
        return self.previous_balance + self.current.net_payable

    def to_dict(self) -> dict:
        c = self.current
        return {
            "labourer_id": self.labourer_id,
            "name": self.name,
            "site_id": self.site_id,
            "rate": float(self.rate),
            "full_days": c.full_days,
            "half_days": c.half_days,
            "absent_days": c.absent_days,
            "wage": float(c.wage),
            "overtime_amount": float(c.overtime_amount),
            "food_allowance_days": c.food_allowance_days,
            "food_allowance_amount": float(c.food_allowance_amount),
            "advance_amount": float(c.advance_amount),
            "current_net_payable": float(self.current_net_payable),
            "previous_balance": float(self.previous_balance),
            "total_payable": float(self.total_payable),
        }
