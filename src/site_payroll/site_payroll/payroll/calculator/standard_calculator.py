from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from .base import PayrollCalculator
from ...attendance.model import WorkedDay
from ...core.constants import DEFAULT_FOOD_ALLOWANCE_AMOUNT, FULL_DAY_UNITS, HALF_DAY_UNITS


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: full day = 8 rate-units, half day = 4; flat food allowance
    for every present day on which the site did not provide food."""

    def __init__(self, *, food_allowance: Optional[Decimal] = None):
        self._food_allowance = Decimal(food_allowance) if food_allowance is not None else DEFAULT_FOOD_ALLOWANCE_AMOUNT

    def wage(self, *, full_days: int, half_days: int, rate: Decimal) -> Decimal:
        return full_days * FULL_DAY_UNITS * rate + half_days * HALF_DAY_UNITS * rate

    def food_allowance_days(self, worked_days: Iterable[WorkedDay], food_provided: set[tuple[int, date]]) -> int:
        return sum(
            1
            for day in worked_days
            if day.status.is_present and (day.site_id, day.work_date) not in food_provided
        )

    def food_allowance_amount(self, days: int) -> Decimal:
        return days * self._food_allowance
