from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..common.datetime_utils import DateWindow
from .model import AdvanceRecord


class AdvanceRepository(Protocol):
    def create(
        self,
        *,
        labourer_id: int,
        amount: Decimal,
        advance_date: date,
        notes: Optional[str] = None,
        created_by: Optional[int] = None,
    ) -> int:
        raise NotImplementedError

    def list_advances(
        self,
        *,
        window: DateWindow,
        labourer_id: Optional[int] = None,
        limit: int = 500,
    ) -> Sequence[AdvanceRecord]:
        raise NotImplementedError

    def sum_amount(self, *, labourer_id: int, window: DateWindow) -> Decimal:
        """Advances carry no site, so there is no site filter."""

        raise NotImplementedError
