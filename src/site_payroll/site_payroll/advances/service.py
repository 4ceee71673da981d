from __future__ import annotations

import logging
from typing import Any, Sequence

from ..common.datetime_utils import DateWindow, coerce_date
from ..common.validators import optional_id, require_amount, require_id
from ..core.constants import DEFAULT_ADVANCE_LIST_LIMIT
from ..core.exceptions import ValidationError
from .model import AdvanceRecord
from .repository import AdvanceRepository

logger = logging.getLogger(__name__)


class AdvanceService:
    def __init__(self, advances: AdvanceRepository):
        self._advances = advances

    def record_advance(
        self,
        *,
        labourer_id: Any,
        amount: Any,
        advance_date: Any,
        notes: Any = None,
        created_by: Any = None,
    ) -> int:
        labourer = require_id(labourer_id, "labourer_id")
        value = require_amount(amount, "amount", allow_zero=False)
        day = coerce_date(advance_date, "date")

        advance_id = self._advances.create(
            labourer_id=labourer,
            amount=value,
            advance_date=day,
            notes=str(notes or "").strip() or None,
            created_by=optional_id(created_by, "created_by"),
        )
        logger.info("Recorded advance %s of %s for labourer %s on %s", advance_id, value, labourer, day)
        return advance_id

    def list_advances(
        self,
        *,
        labourer_id: Any = None,
        start: Any = None,
        end: Any = None,
    ) -> Sequence[AdvanceRecord]:
        start_d = coerce_date(start, "start_date") if start else None
        end_d = coerce_date(end, "end_date") if end else None
        if start_d and end_d and end_d < start_d:
            raise ValidationError("end_date must be on or after start_date")

        return self._advances.list_advances(
            window=DateWindow(start=start_d, end=end_d),
            labourer_id=optional_id(labourer_id, "labourer_id"),
            limit=DEFAULT_ADVANCE_LIST_LIMIT,
        )
