from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.site_payroll.site_payroll.advances.mysql_advance_repository import MySQLAdvanceRepository
from src.site_payroll.site_payroll.core.exceptions import StoreError, ValidationError
from src.site_payroll.site_payroll.overtime.model import OvertimeRecord
from src.site_payroll.site_payroll.overtime.mysql_overtime_repository import MySQLOvertimeRepository
from tests.fakes import FakeConnectionFactory

DAY = date(2026, 3, 10)


def _overtime(labourer_id: int = 1) -> OvertimeRecord:
    return OvertimeRecord(labourer_id=labourer_id, site_id=1, work_date=DAY, hours=Decimal("2"), amount=Decimal("200"))


def test_overtime_upsert_commits_whole_batch():
    factory = FakeConnectionFactory()
    repo = MySQLOvertimeRepository(factory)

    assert repo.upsert_many([_overtime(1), _overtime(2)]) == 2

    assert factory.conn.committed
    [stmt] = factory.conn.statements
    assert "AS new ON DUPLICATE KEY UPDATE" in stmt


def test_overtime_for_unknown_labourer_is_bad_input():
    factory = FakeConnectionFactory()
    factory.conn.missing_labourer = True

    with pytest.raises(ValidationError, match="unknown labourer"):
        MySQLOvertimeRepository(factory).upsert_many([_overtime(99)])

    assert factory.conn.rolled_back and not factory.conn.committed


def test_advance_for_unknown_labourer_is_bad_input():
    factory = FakeConnectionFactory()
    factory.conn.missing_labourer = True
    repo = MySQLAdvanceRepository(factory)

    with pytest.raises(ValidationError) as excinfo:
        repo.create(labourer_id=99, amount=Decimal("100"), advance_date=DAY)

    assert not isinstance(excinfo.value, StoreError)
    assert factory.conn.rolled_back


def test_advance_insert_returns_new_id():
    factory = FakeConnectionFactory()

    assert MySQLAdvanceRepository(factory).create(labourer_id=1, amount=Decimal("100"), advance_date=DAY) == 1
    assert factory.conn.committed
