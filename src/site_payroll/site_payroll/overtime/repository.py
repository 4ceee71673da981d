from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..common.datetime_utils import DateWindow
from .model import OvertimeRecord


class OvertimeRepository(Protocol):
    def upsert_many(self, records: Sequence[OvertimeRecord]) -> int:
        """Insert or replace each (labourer_id, work_date) row in one transaction."""

        raise NotImplementedError

    def list_for_date(self, *, work_date: date, site_id: Optional[int] = None) -> Sequence[OvertimeRecord]:
        raise NotImplementedError

    def sum_amount(self, *, labourer_id: int, window: DateWindow, site_id: Optional[int] = None) -> Decimal:
        raise NotImplementedError
