from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one labourer's status for one day."""

    labourer_id: int
    site_id: int
    supervisor_id: int
    work_date: date
    status: AttendanceStatus
    attendance_id: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "attendance_id": self.attendance_id,
            "labourer_id": self.labourer_id,
            "site_id": self.site_id,
            "supervisor_id": self.supervisor_id,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "status": self.status.value,
        }


@dataclass(frozen=True)
class DailySiteStatus:
    """Lock row for a (site, day). is_locked=True is terminal."""

    site_id: int
    work_date: date
    is_locked: bool
    food_provided: bool
    submitted_by: Optional[int] = None
    submitted_at: Optional[datetime] = None


@dataclass(frozen=True)
class LockStatus:
    is_locked: bool
    food_provided: bool

    @classmethod
    def from_row(cls, row: Optional[DailySiteStatus]) -> "LockStatus":
        if row is None:
            return cls(is_locked=False, food_provided=False)
        return cls(is_locked=bool(row.is_locked), food_provided=bool(row.food_provided))

    def to_dict(self) -> dict:
        return {"is_locked": self.is_locked, "food_provided": self.food_provided}


@dataclass(frozen=True)
class WorkedDay:
    """Read-model for food allowance: a present day and where it was worked."""

    site_id: int
    work_date: date
    status: AttendanceStatus


@dataclass(frozen=True)
class SubmissionResult:
    site_id: int
    work_date: date
    record_count: int
    food_provided: bool
    submitted_by: int
    submitted_at: datetime

    def to_dict(self) -> dict:
        return {
            "site_id": self.site_id,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "record_count": self.record_count,
            "food_provided": self.food_provided,
            "submitted_by": self.submitted_by,
            "submitted_at": self.submitted_at.isoformat(timespec="seconds"),
        }


@dataclass(frozen=True)
class SiteAttendanceOverview:
    """Read-model for the daily per-site attendance report."""

    site_id: int
    site_name: str
    total_labourers: int
    present_count: int
    absent_count: int
    is_submitted: bool

    def to_dict(self) -> dict:
        return {
            "site_id": self.site_id,
            "site_name": self.site_name,
            "total_labourers": self.total_labourers,
            "present_count": self.present_count,
            "absent_count": self.absent_count,
            "is_submitted": self.is_submitted,
        }
