from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.constants import DATE_FORMAT, MONTH_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse a zero-padded YYYY-MM-DD string into date."""
    parsed = datetime.strptime(value, DATE_FORMAT).date()
    # strptime also accepts unpadded fields such as "2026-3-1".
    if format_iso_date(parsed) != value:
        raise ValueError(f"not a zero-padded date: {value!r}")
    return parsed


def format_iso_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def coerce_date(value, field_name: str = "date") -> date:
    """Accept a date or a zero-padded YYYY-MM-DD string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return parse_iso_date(value.strip())
        except ValueError:
            raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")
    raise ValidationError(f"{field_name} is required")


def month_bounds(month: str) -> tuple[date, date]:
    """First and last day of a YYYY-MM calendar month."""
    text = (month or "").strip()
    try:
        first = datetime.strptime(text, MONTH_FORMAT).date()
    except ValueError:
        raise ValidationError("month must be in YYYY-MM format")
    if first.strftime(MONTH_FORMAT) != text:
        raise ValidationError("month must be in YYYY-MM format")
    last_day = calendar.monthrange(first.year, first.month)[1]
    return first, first.replace(day=last_day)


@dataclass(frozen=True)
class DateWindow:
    """A span of ledger dates.

    Either an inclusive range (``start``/``end``, each optional) or, when
    ``before`` is set, every date strictly earlier than ``before``.
    """

    start: Optional[date] = None
    end: Optional[date] = None
    before: Optional[date] = None

    @classmethod
    def between(cls, start: date, end: date) -> "DateWindow":
        return cls(start=start, end=end)

    @classmethod
    def history_before(cls, cut: date) -> "DateWindow":
        return cls(before=cut)

    def contains(self, value: date) -> bool:
        if self.before is not None:
            return value < self.before
        if self.start is not None and value < self.start:
            return False
        if self.end is not None and value > self.end:
            return False
        return True

    def sql_clauses(self, column: str) -> tuple[list[str], list[object]]:
        if self.before is not None:
            return [f"{column} < %s"], [self.before]

        clauses: list[str] = []
        params: list[object] = []
        if self.start is not None:
            clauses.append(f"{column} >= %s")
            params.append(self.start)
        if self.end is not None:
            clauses.append(f"{column} <= %s")
            params.append(self.end)
        return clauses, params
