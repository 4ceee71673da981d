from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import coerce_date
from ..common.validators import optional_id, require_amount, require_id
from ..core.exceptions import ValidationError
from .model import OvertimeRecord
from .repository import OvertimeRepository

logger = logging.getLogger(__name__)


class OvertimeService:
    """Overtime ledger. Not lock-protected: entries can be revised any time."""

    def __init__(self, overtime: OvertimeRepository):
        self._overtime = overtime

    def save_overtime(self, records: Sequence[Mapping[str, Any]] | Mapping[str, Any]) -> int:
        if isinstance(records, Mapping):
            records = [records]
        if not records:
            raise ValidationError("No overtime records provided")

        parsed = [self._parse(raw, idx) for idx, raw in enumerate(records, start=1)]
        count = self._overtime.upsert_many(parsed)
        logger.info("Saved %d overtime records", count)
        return count

    def get_overtime(self, *, work_date: Any, site_id: Any = None) -> Sequence[OvertimeRecord]:
        return self._overtime.list_for_date(
            work_date=coerce_date(work_date),
            site_id=optional_id(site_id, "site_id"),
        )

    @staticmethod
    def _parse(raw, idx: int) -> OvertimeRecord:
        if not isinstance(raw, Mapping):
            raise ValidationError(f"Record {idx}: expected an object")
        try:
            notes: Optional[str] = str(raw.get("notes") or "").strip() or None
            return OvertimeRecord(
                labourer_id=require_id(raw.get("labourer_id"), "labourer_id"),
                site_id=require_id(raw.get("site_id"), "site_id"),
                work_date=coerce_date(raw.get("work_date", raw.get("date")), "date"),
                # Zero is allowed: it clears a previously saved entry.
                hours=require_amount(raw.get("hours"), "hours"),
                amount=require_amount(raw.get("amount"), "amount"),
                notes=notes,
                created_by=optional_id(raw.get("created_by"), "created_by"),
            )
        except ValidationError as exc:
            raise ValidationError(f"Record {idx}: {exc}") from exc
