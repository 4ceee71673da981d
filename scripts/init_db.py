"""Create the site_payroll database and apply database/schema.sql.

Exits non-zero if any ledger table is still missing afterwards.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.site_payroll.site_payroll.database.bootstrap import apply_schema, list_tables

LEDGER_TABLES = ("attendance", "daily_site_attendance_status", "overtime", "advances")


def main() -> int:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    count = apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = list_tables(db_config)
    missing = [t for t in LEDGER_TABLES if t not in tables]

    print(f"{db_config.get('database')}: {count} statements applied, tables: {', '.join(tables)}")
    if missing:
        print(f"Missing tables: {', '.join(missing)}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
