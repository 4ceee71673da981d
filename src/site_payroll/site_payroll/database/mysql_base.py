from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import StoreError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


def _connect(conn_factory: DatabaseConnection):
    try:
        return conn_factory.connect()
    except mysql.connector.Error as exc:
        logger.error("Cannot connect to record store: %s", exc)
        raise StoreError("Record store is unreachable") from exc


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Run statements on a fresh connection and commit on success.

    Any exception rolls the connection back; driver errors surface as
    StoreError with the original exception chained.
    """
    conn = _connect(conn_factory)
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        _safe_rollback(conn)
        logger.error("Record store operation failed: %s", exc)
        raise StoreError("Record store operation failed") from exc
    except Exception:
        _safe_rollback(conn)
        raise
    finally:
        conn.close()


@contextmanager
def db_transaction(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Like db_cursor, but opens an explicit transaction first.

    Used for multi-statement writes that must be all-or-nothing.
    """
    with db_cursor(conn_factory, dictionary=dictionary) as (conn, cur):
        conn.start_transaction()
        yield conn, cur


def _safe_rollback(conn) -> None:
    try:
        conn.rollback()
    except mysql.connector.Error as exc:
        # The transaction dies with the connection anyway.
        logger.warning("Rollback failed: %s", exc)


def is_duplicate_key(exc: BaseException) -> bool:
    return isinstance(exc, mysql.connector.IntegrityError) and getattr(exc, "errno", None) == errorcode.ER_DUP_ENTRY


def is_missing_reference(exc: BaseException) -> bool:
    """True for a foreign-key violation on insert or update (unknown parent row)."""
    return isinstance(exc, mysql.connector.IntegrityError) and getattr(exc, "errno", None) in (
        errorcode.ER_NO_REFERENCED_ROW,
        errorcode.ER_NO_REFERENCED_ROW_2,
    )


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
