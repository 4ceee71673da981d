from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Daily attendance status stored in the ledger."""

    FULL = "full"
    HALF = "half"
    ABSENT = "absent"

    @property
    def is_present(self) -> bool:
        return self in (AttendanceStatus.FULL, AttendanceStatus.HALF)
