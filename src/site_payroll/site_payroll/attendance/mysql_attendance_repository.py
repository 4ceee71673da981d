from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

import mysql.connector

from ..common.datetime_utils import DateWindow
from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError, ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, db_transaction, fetchall, fetchone, is_duplicate_key, is_missing_reference
from .model import AttendanceRecord, DailySiteStatus, SiteAttendanceOverview, WorkedDay
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        labourer_id=int(r["labourer_id"]),
        site_id=int(r["site_id"]),
        supervisor_id=int(r["supervisor_id"]),
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_site_status(self, *, site_id: int, work_date: date) -> Optional[DailySiteStatus]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT site_id, work_date, is_locked, food_provided, submitted_by, submitted_at
                FROM daily_site_attendance_status
                WHERE site_id=%s AND work_date=%s
                """,
                (int(site_id), work_date),
            )
            r = fetchone(cur)
            if not r:
                return None
            return DailySiteStatus(
                site_id=int(r["site_id"]),
                work_date=r["work_date"],
                is_locked=bool(r["is_locked"]),
                food_provided=bool(r["food_provided"]),
                submitted_by=int(r["submitted_by"]) if r.get("submitted_by") is not None else None,
                submitted_at=r.get("submitted_at"),
            )

    def list_for_date(self, *, work_date: date, site_id: Optional[int] = None) -> Sequence[AttendanceRecord]:
        clauses = ["work_date=%s"]
        params: list[object] = [work_date]
        if site_id is not None:
            clauses.append("site_id=%s")
            params.append(int(site_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT attendance_id, labourer_id, site_id, supervisor_id, work_date, status
                FROM attendance
                WHERE {where}
                ORDER BY labourer_id ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

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
        with db_transaction(self._conn_factory) as (_, cur):
            self._claim_lock(
                cur,
                site_id=site_id,
                work_date=work_date,
                food_provided=food_provided,
                submitted_by=submitted_by,
                submitted_at=submitted_at,
            )
            self._warn_cross_site_overwrites(cur, site_id=site_id, work_date=work_date, records=records)
            try:
                cur.executemany(
                    """
                    INSERT INTO attendance(labourer_id, site_id, supervisor_id, work_date, status)
                    VALUES(%s,%s,%s,%s,%s) AS new
                    ON DUPLICATE KEY UPDATE
                        site_id=new.site_id,
                        supervisor_id=new.supervisor_id,
                        status=new.status
                    """,
                    [
                        (rec.labourer_id, rec.site_id, rec.supervisor_id, rec.work_date, rec.status.value)
                        for rec in records
                    ],
                )
            except mysql.connector.Error as exc:
                if is_missing_reference(exc):
                    raise ValidationError(
                        f"Unknown labourer in attendance for site {site_id} on {work_date:%Y-%m-%d}"
                    ) from exc
                raise

    @staticmethod
    def _claim_lock(cur, *, site_id: int, work_date: date, food_provided: bool, submitted_by: int, submitted_at: datetime) -> None:
        # An open row left by an older process is flipped in place; the row
        # lock taken by UPDATE serializes concurrent claimants.
        cur.execute(
            """
            UPDATE daily_site_attendance_status
            SET is_locked=1, food_provided=%s, submitted_by=%s, submitted_at=%s
            WHERE site_id=%s AND work_date=%s AND is_locked=0
            """,
            (int(bool(food_provided)), int(submitted_by), submitted_at, int(site_id), work_date),
        )
        if cur.rowcount > 0:
            return

        try:
            cur.execute(
                """
                INSERT INTO daily_site_attendance_status(site_id, work_date, is_locked, food_provided, submitted_by, submitted_at)
                VALUES(%s,%s,1,%s,%s,%s)
                """,
                (int(site_id), work_date, int(bool(food_provided)), int(submitted_by), submitted_at),
            )
        except mysql.connector.Error as exc:
            if is_duplicate_key(exc):
                raise ConflictError(
                    f"Attendance for site {site_id} on {work_date:%Y-%m-%d} is already submitted and locked"
                ) from exc
            raise

    @staticmethod
    def _warn_cross_site_overwrites(cur, *, site_id: int, work_date: date, records: Sequence[AttendanceRecord]) -> None:
        labourer_ids = [rec.labourer_id for rec in records]
        placeholders = ",".join(["%s"] * len(labourer_ids))
        cur.execute(
            f"""
            SELECT labourer_id, site_id
            FROM attendance
            WHERE work_date=%s AND site_id<>%s AND labourer_id IN ({placeholders})
            """,
            (work_date, int(site_id), *labourer_ids),
        )
        for r in fetchall(cur):
            logger.warning(
                "Labourer %s already recorded at site %s on %s; overwriting with site %s",
                r["labourer_id"],
                r["site_id"],
                work_date,
                site_id,
            )

    def count_by_status(
        self,
        *,
        labourer_id: int,
        window: DateWindow,
        site_id: Optional[int] = None,
    ) -> dict[AttendanceStatus, int]:
        clauses, params = window.sql_clauses("work_date")
        clauses.insert(0, "labourer_id=%s")
        params.insert(0, int(labourer_id))
        if site_id is not None:
            clauses.append("site_id=%s")
            params.append(int(site_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT status, COUNT(*) AS day_count
                FROM attendance
                WHERE {where}
                GROUP BY status
                """,
                tuple(params),
            )
            return {AttendanceStatus(r["status"]): int(r["day_count"]) for r in fetchall(cur)}

    def list_worked_days(
        self,
        *,
        labourer_id: int,
        window: DateWindow,
        site_id: Optional[int] = None,
    ) -> Sequence[WorkedDay]:
        clauses, params = window.sql_clauses("work_date")
        clauses[:0] = ["labourer_id=%s", "status IN ('full', 'half')"]
        params.insert(0, int(labourer_id))
        if site_id is not None:
            clauses.append("site_id=%s")
            params.append(int(site_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT site_id, work_date, status
                FROM attendance
                WHERE {where}
                ORDER BY work_date ASC
                """,
                tuple(params),
            )
            return [
                WorkedDay(site_id=int(r["site_id"]), work_date=r["work_date"], status=AttendanceStatus(r["status"]))
                for r in fetchall(cur)
            ]

    def food_provided_days(self, *, window: DateWindow, site_id: Optional[int] = None) -> set[tuple[int, date]]:
        clauses, params = window.sql_clauses("work_date")
        clauses.insert(0, "food_provided=1")
        if site_id is not None:
            clauses.append("site_id=%s")
            params.append(int(site_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT site_id, work_date
                FROM daily_site_attendance_status
                WHERE {where}
                """,
                tuple(params),
            )
            return {(int(r["site_id"]), r["work_date"]) for r in fetchall(cur)}

    def get_site_overview(self, *, work_date: date) -> Sequence[SiteAttendanceOverview]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    s.site_id,
                    s.site_name,
                    (SELECT COUNT(*) FROM labourers l
                        WHERE l.site_id = s.site_id AND l.status = 'active') AS total_labourers,
                    (SELECT COUNT(*) FROM attendance a
                        WHERE a.site_id = s.site_id AND a.work_date = %s AND a.status IN ('full', 'half')) AS present_count,
                    (SELECT COUNT(*) FROM attendance a
                        WHERE a.site_id = s.site_id AND a.work_date = %s AND a.status = 'absent') AS absent_count,
                    COALESCE(d.is_locked, 0) AS is_submitted
                FROM sites s
                LEFT JOIN daily_site_attendance_status d ON d.site_id = s.site_id AND d.work_date = %s
                ORDER BY s.site_id ASC
                """,
                (work_date, work_date, work_date),
            )
            return [
                SiteAttendanceOverview(
                    site_id=int(r["site_id"]),
                    site_name=r["site_name"],
                    total_labourers=int(r.get("total_labourers") or 0),
                    present_count=int(r.get("present_count") or 0),
                    absent_count=int(r.get("absent_count") or 0),
                    is_submitted=bool(r.get("is_submitted")),
                )
                for r in fetchall(cur)
            ]
