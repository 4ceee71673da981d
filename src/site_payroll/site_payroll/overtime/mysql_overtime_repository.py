from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

import mysql.connector

from ..common.datetime_utils import DateWindow
from ..common.validators import to_money
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, db_transaction, fetchall, fetchone, is_missing_reference
from .model import OvertimeRecord
from .repository import OvertimeRepository


class MySQLOvertimeRepository(OvertimeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert_many(self, records: Sequence[OvertimeRecord]) -> int:
        with db_transaction(self._conn_factory) as (_, cur):
            try:
                cur.executemany(
                    """
                    INSERT INTO overtime(labourer_id, site_id, work_date, hours, amount, notes, created_by)
                    VALUES(%s,%s,%s,%s,%s,%s,%s) AS new
                    ON DUPLICATE KEY UPDATE
                        site_id=new.site_id,
                        hours=new.hours,
                        amount=new.amount,
                        notes=new.notes
                    """,
                    [
                        (r.labourer_id, r.site_id, r.work_date, r.hours, r.amount, r.notes, r.created_by)
                        for r in records
                    ],
                )
            except mysql.connector.Error as exc:
                if is_missing_reference(exc):
                    raise ValidationError("Overtime refers to an unknown labourer") from exc
                raise
        return len(records)

    def list_for_date(self, *, work_date: date, site_id: Optional[int] = None) -> Sequence[OvertimeRecord]:
        clauses = ["o.work_date=%s"]
        params: list[object] = [work_date]
        if site_id is not None:
            clauses.append("o.site_id=%s")
            params.append(int(site_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT o.overtime_id, o.labourer_id, l.full_name AS labourer_name, o.site_id,
                       o.work_date, o.hours, o.amount, o.notes, o.created_by
                FROM overtime o
                JOIN labourers l ON l.labourer_id = o.labourer_id
                WHERE {where}
                ORDER BY o.labourer_id ASC
                """,
                tuple(params),
            )
            return [
                OvertimeRecord(
                    overtime_id=int(r["overtime_id"]),
                    labourer_id=int(r["labourer_id"]),
                    labourer_name=r.get("labourer_name"),
                    site_id=int(r["site_id"]),
                    work_date=r["work_date"],
                    hours=to_money(r.get("hours")),
                    amount=to_money(r.get("amount")),
                    notes=r.get("notes"),
                    created_by=r.get("created_by"),
                )
                for r in fetchall(cur)
            ]

    def sum_amount(self, *, labourer_id: int, window: DateWindow, site_id: Optional[int] = None) -> Decimal:
        clauses, params = window.sql_clauses("work_date")
        clauses.insert(0, "labourer_id=%s")
        params.insert(0, int(labourer_id))
        if site_id is not None:
            clauses.append("site_id=%s")
            params.append(int(site_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT SUM(amount) AS total_amount FROM overtime WHERE {where}", tuple(params))
            r = fetchone(cur)
            return to_money(r.get("total_amount") if r else None)
