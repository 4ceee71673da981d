from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import to_money
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Labourer
from .repository import LabourerRepository


def _to_labourer(r: dict) -> Labourer:
    rate = r.get("rate")
    return Labourer(
        labourer_id=int(r["labourer_id"]),
        full_name=r["full_name"],
        rate=to_money(rate) if rate is not None else None,
        site_id=int(r["site_id"]) if r.get("site_id") is not None else None,
        status=r.get("status") or "active",
    )


class MySQLLabourerRepository(LabourerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_labourers(self, *, site_id: Optional[int] = None) -> Sequence[Labourer]:
        where = ""
        params: tuple = ()
        if site_id is not None:
            where = "WHERE site_id=%s"
            params = (int(site_id),)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT labourer_id, full_name, rate, site_id, status
                FROM labourers
                {where}
                ORDER BY labourer_id ASC
                """,
                params,
            )
            return [_to_labourer(r) for r in fetchall(cur)]
