"""Schema bootstrap for a fresh MySQL server.

Used by ``create_app`` when ``AUTO_INIT_DB`` is on and by ``scripts/init_db.py``.
Every statement in ``database/schema.sql`` is ``CREATE ... IF NOT EXISTS``, so
applying it twice is harmless.
"""

from __future__ import annotations

import logging
import re
from contextlib import closing
from pathlib import Path
from typing import Iterator

import mysql.connector

from .connection import DBConfig

logger = logging.getLogger(__name__)

# Quoted literals are matched whole so a ';' inside them never splits a statement.
_SQL_TOKEN = re.compile(r"""'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"|--[^\n]*|;|[^'";-]+|-""", re.S)
_DATABASE_DIRECTIVE = re.compile(r"^(CREATE\s+DATABASE|USE)\b", re.I)


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Split a schema script into statements, dropping ``--`` comments.

    ``CREATE DATABASE`` and ``USE`` are skipped: the target database always
    comes from settings.
    """
    parts: list[str] = []
    for match in _SQL_TOKEN.finditer(sql):
        token = match.group(0)
        if token.startswith("--"):
            continue
        if token != ";":
            parts.append(token)
            continue
        stmt = "".join(parts).strip()
        parts.clear()
        if stmt and not _DATABASE_DIRECTIVE.match(stmt):
            yield stmt

    tail = "".join(parts).strip()
    if tail and not _DATABASE_DIRECTIVE.match(tail):
        yield tail


def ensure_database_exists(target: DBConfig) -> None:
    with closing(mysql.connector.connect(**target.connect_kwargs(with_database=False))) as conn:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> int:
    """Create the database if needed and run the schema. Returns the statement count."""
    target = DBConfig.from_dict(db_config)
    ensure_database_exists(target)

    schema_path = Path(schema_path)
    statements = list(iter_sql_statements(schema_path.read_text(encoding="utf-8")))

    with closing(mysql.connector.connect(**target.connect_kwargs())) as conn:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()

    logger.info("Applied %d statements from %s to %s", len(statements), schema_path.name, target.database)
    return len(statements)


def list_tables(db_config: dict) -> list[str]:
    target = DBConfig.from_dict(db_config)
    with closing(mysql.connector.connect(**target.connect_kwargs())) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return sorted(row[0] for row in cur.fetchall())
