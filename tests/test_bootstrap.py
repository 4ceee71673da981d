from pathlib import Path

from src.site_payroll.site_payroll.database.bootstrap import iter_sql_statements

SCHEMA = Path(__file__).resolve().parents[1] / "database" / "schema.sql"


def test_splitter_ignores_semicolons_in_literals_and_comments():
    sql = """
    -- leading comment; with a semicolon
    INSERT INTO sites(site_name) VALUES('A; B');
    INSERT INTO sites(site_name) VALUES("it\\"s; fine"); -- trailing
    SELECT 3-1
    """

    stmts = list(iter_sql_statements(sql))

    assert stmts == [
        "INSERT INTO sites(site_name) VALUES('A; B')",
        'INSERT INTO sites(site_name) VALUES("it\\"s; fine")',
        "SELECT 3-1",
    ]


def test_schema_file_creates_ledger_tables_without_database_directives():
    stmts = list(iter_sql_statements(SCHEMA.read_text(encoding="utf-8")))

    assert not any(s.upper().startswith(("USE ", "CREATE DATABASE")) for s in stmts)
    created = {s.split()[5] for s in stmts if s.upper().startswith("CREATE TABLE IF NOT EXISTS")}
    assert {"attendance", "daily_site_attendance_status", "overtime", "advances"} <= created
