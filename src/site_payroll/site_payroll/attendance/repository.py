from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..common.datetime_utils import DateWindow
from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, DailySiteStatus, SiteAttendanceOverview, WorkedDay


class AttendanceRepository(Protocol):
    def get_site_status(self, *, site_id: int, work_date: date) -> Optional[DailySiteStatus]:
        raise NotImplementedError

    def list_for_date(self, *, work_date: date, site_id: Optional[int] = None) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def lock_and_record(
        self,
        *,
        site_id: int,
        work_date: date,
        records: Sequence[AttendanceRecord],
        food_provided: bool,
        submitted_by: int,
        submitted_at: datetime,
    ) -> None:
        """Claim the (site, date) lock and upsert the batch in one transaction.

        Raises ConflictError if the lock is already held. Nothing is written
        unless the whole batch commits.
        """

        raise NotImplementedError

    def count_by_status(
        self,
        *,
        labourer_id: int,
        window: DateWindow,
        site_id: Optional[int] = None,
    ) -> dict[AttendanceStatus, int]:
        raise NotImplementedError

    def list_worked_days(
        self,
        *,
        labourer_id: int,
        window: DateWindow,
        site_id: Optional[int] = None,
    ) -> Sequence[WorkedDay]:
        raise NotImplementedError

    def food_provided_days(self, *, window: DateWindow, site_id: Optional[int] = None) -> set[tuple[int, date]]:
        """(site_id, work_date) keys whose status row has food_provided set."""

        raise NotImplementedError

    def get_site_overview(self, *, work_date: date) -> Sequence[SiteAttendanceOverview]:
        raise NotImplementedError
