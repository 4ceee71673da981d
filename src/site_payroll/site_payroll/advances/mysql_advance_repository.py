from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

import mysql.connector

from ..common.datetime_utils import DateWindow
from ..common.validators import to_money
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_missing_reference
from .model import AdvanceRecord
from .repository import AdvanceRepository


class MySQLAdvanceRepository(AdvanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        labourer_id: int,
        amount: Decimal,
        advance_date: date,
        notes: Optional[str] = None,
        created_by: Optional[int] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO advances(labourer_id, amount, advance_date, notes, created_by)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (int(labourer_id), amount, advance_date, notes, created_by),
                )
            except mysql.connector.Error as exc:
                if is_missing_reference(exc):
                    raise ValidationError(f"Unknown labourer {labourer_id}") from exc
                raise
            return int(cur.lastrowid)

    def list_advances(
        self,
        *,
        window: DateWindow,
        labourer_id: Optional[int] = None,
        limit: int = 500,
    ) -> Sequence[AdvanceRecord]:
        clauses, params = window.sql_clauses("advance_date")
        if labourer_id is not None:
            clauses.append("labourer_id=%s")
            params.append(int(labourer_id))

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT advance_id, labourer_id, amount, advance_date, notes, created_by
                FROM advances
                {where}
                ORDER BY advance_date DESC, advance_id DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [
                AdvanceRecord(
                    advance_id=int(r["advance_id"]),
                    labourer_id=int(r["labourer_id"]),
                    amount=to_money(r.get("amount")),
                    advance_date=r["advance_date"],
                    notes=r.get("notes"),
                    created_by=r.get("created_by"),
                )
                for r in fetchall(cur)
            ]

    def sum_amount(self, *, labourer_id: int, window: DateWindow) -> Decimal:
        clauses, params = window.sql_clauses("advance_date")
        clauses.insert(0, "labourer_id=%s")
        params.insert(0, int(labourer_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT SUM(amount) AS total_amount FROM advances WHERE {' AND '.join(clauses)}",
                tuple(params),
            )
            r = fetchone(cur)
            return to_money(r.get("total_amount") if r else None)
