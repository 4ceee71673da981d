from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..common.clock import Clock, SystemClock
from ..common.datetime_utils import coerce_date
from ..common.validators import optional_id, require_id
from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError, ValidationError
from .model import AttendanceRecord, LockStatus, SiteAttendanceOverview, SubmissionResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use cases of the attendance ledger.

    A site-day moves from Open to Locked exactly once, when its supervisor
    submits the day's attendance. Every check below runs before anything is
    written; the repository then claims the lock and writes the batch in one
    transaction.
    """

    def __init__(self, attendance: AttendanceRepository, *, clock: Optional[Clock] = None):
        self._attendance = attendance
        self._clock = clock or SystemClock()

    def submit_attendance(
        self,
        records: Sequence[Mapping[str, Any] | AttendanceRecord],
        *,
        food_provided: bool = False,
        submitted_by: Any = None,
    ) -> SubmissionResult:
        batch = self._parse_batch(records)
        site_id = batch[0].site_id
        work_date = batch[0].work_date

        today = self._clock.today()
        if work_date > today:
            raise ValidationError("Cannot mark attendance for future dates")

        submitter = optional_id(submitted_by, "submitted_by") or batch[0].supervisor_id

        # Fast path only; the repository's lock claim is the real guard.
        if self.get_lock_status(site_id=site_id, work_date=work_date).is_locked:
            logger.info("Rejected submission for locked site %s on %s", site_id, work_date)
            raise ConflictError(f"Attendance for site {site_id} on {work_date:%Y-%m-%d} is already submitted and locked")

        submitted_at = self._clock.now()
        try:
            self._attendance.lock_and_record(
                site_id=site_id,
                work_date=work_date,
                records=batch,
                food_provided=bool(food_provided),
                submitted_by=submitter,
                submitted_at=submitted_at,
            )
        except ConflictError:
            logger.info("Lost lock race for site %s on %s", site_id, work_date)
            raise

        logger.info(
            "Locked site %s on %s with %d attendance records (food_provided=%s)",
            site_id,
            work_date,
            len(batch),
            bool(food_provided),
        )
        return SubmissionResult(
            site_id=site_id,
            work_date=work_date,
            record_count=len(batch),
            food_provided=bool(food_provided),
            submitted_by=submitter,
            submitted_at=submitted_at,
        )

    def get_lock_status(self, *, site_id: Any, work_date: Any) -> LockStatus:
        row = self._attendance.get_site_status(
            site_id=require_id(site_id, "site_id"),
            work_date=coerce_date(work_date),
        )
        return LockStatus.from_row(row)

    def get_attendance(self, *, work_date: Any, site_id: Any = None) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_date(
            work_date=coerce_date(work_date),
            site_id=optional_id(site_id, "site_id"),
        )

    def get_site_overview(self, *, work_date: Any = None) -> Sequence[SiteAttendanceOverview]:
        day: date = coerce_date(work_date) if work_date else self._clock.today()
        return self._attendance.get_site_overview(work_date=day)

    @staticmethod
    def _parse_batch(records) -> list[AttendanceRecord]:
        if not records or isinstance(records, (str, bytes, Mapping)):
            raise ValidationError("Invalid attendance records: expected a non-empty list")

        batch: list[AttendanceRecord] = []
        seen: set[int] = set()
        for idx, raw in enumerate(records, start=1):
            rec = AttendanceService._parse_record(raw, idx)
            if batch and (rec.site_id, rec.work_date) != (batch[0].site_id, batch[0].work_date):
                raise ValidationError(f"Record {idx}: all records must share the same site and date")
            if rec.labourer_id in seen:
                raise ValidationError(f"Record {idx}: labourer {rec.labourer_id} appears more than once")
            seen.add(rec.labourer_id)
            batch.append(rec)
        return batch

    @staticmethod
    def _parse_record(raw, idx: int) -> AttendanceRecord:
        if isinstance(raw, AttendanceRecord):
            raw = asdict(raw)
        if not isinstance(raw, Mapping):
            raise ValidationError(f"Record {idx}: expected an object")

        prefix = f"Record {idx}: "
        try:
            labourer_id = require_id(raw.get("labourer_id"), "labourer_id")
            site_id = require_id(raw.get("site_id"), "site_id")
            supervisor_id = require_id(raw.get("supervisor_id"), "supervisor_id")
            work_date = coerce_date(raw.get("work_date", raw.get("date")), "date")
        except ValidationError as exc:
            raise ValidationError(prefix + str(exc)) from exc

        status_raw = raw.get("status")
        try:
            status = AttendanceStatus(status_raw)
        except ValueError:
            raise ValidationError(f"{prefix}status must be one of full, half, absent")

        return AttendanceRecord(
            labourer_id=labourer_id,
            site_id=site_id,
            supervisor_id=supervisor_id,
            work_date=work_date,
            status=status,
        )
