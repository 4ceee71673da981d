from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Iterable

from ...attendance.model import WorkedDay


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def wage(self, *, full_days: int, half_days: int, rate: Decimal) -> Decimal:
        raise NotImplementedError

    @abstractmethod
    def food_allowance_days(self, worked_days: Iterable[WorkedDay], food_provided: set[tuple[int, date]]) -> int:
        raise NotImplementedError

    @abstractmethod
    def food_allowance_amount(self, days: int) -> Decimal:
        raise NotImplementedError
