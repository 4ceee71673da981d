from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.site_payroll.site_payroll.advances.service import AdvanceService
from src.site_payroll.site_payroll.core.exceptions import ValidationError
from src.site_payroll.site_payroll.overtime.service import OvertimeService
from tests.fakes import InMemoryAdvances, InMemoryOvertime


def test_overtime_upserts_on_labourer_and_date():
    repo = InMemoryOvertime()
    svc = OvertimeService(repo)

    svc.save_overtime({"labourer_id": 1, "site_id": 1, "date": "2026-03-02", "hours": 2, "amount": 200, "created_by": 9})
    svc.save_overtime({"labourer_id": 1, "site_id": 1, "date": "2026-03-02", "hours": "3.5", "amount": "350", "notes": " late pour "})

    [rec] = svc.get_overtime(work_date="2026-03-02")
    assert rec.hours == Decimal("3.5")
    assert rec.amount == Decimal("350")
    assert rec.notes == "late pour"
    assert rec.created_by == 9


def test_overtime_accepts_zero_to_clear_an_entry():
    repo = InMemoryOvertime()
    svc = OvertimeService(repo)
    svc.save_overtime([{"labourer_id": 1, "site_id": 1, "date": "2026-03-02", "hours": 2, "amount": 200}])

    svc.save_overtime([{"labourer_id": 1, "site_id": 1, "date": "2026-03-02", "hours": 0, "amount": 0}])

    assert repo.rows[(1, date(2026, 3, 2))].amount == Decimal("0")


def test_overtime_list_filters_by_site():
    svc = OvertimeService(InMemoryOvertime())
    count = svc.save_overtime(
        [
            {"labourer_id": 1, "site_id": 1, "date": "2026-03-02", "hours": 1, "amount": 100},
            {"labourer_id": 2, "site_id": 2, "date": "2026-03-02", "hours": 1, "amount": 100},
        ]
    )

    assert count == 2
    assert [r.labourer_id for r in svc.get_overtime(work_date="2026-03-02", site_id="2")] == [2]


@pytest.mark.parametrize(
    "payload",
    [
        [],
        [{"labourer_id": 1, "site_id": 1, "date": "2026-03-02", "hours": -1, "amount": 100}],
        [{"labourer_id": 1, "site_id": 1, "date": "2026-03-02", "hours": 1}],
        [{"labourer_id": 1, "date": "2026-03-02", "hours": 1, "amount": 100}],
        ["oops"],
    ],
)
def test_invalid_overtime_is_rejected_before_any_write(payload):
    repo = InMemoryOvertime()

    with pytest.raises(ValidationError):
        OvertimeService(repo).save_overtime(payload)
    assert repo.rows == {}


def test_record_advance_returns_id_and_trims_notes():
    repo = InMemoryAdvances()
    svc = AdvanceService(repo)

    advance_id = svc.record_advance(labourer_id="3", amount="250.50", advance_date="2026-03-05", notes="  rent ")

    assert advance_id == 1
    assert repo.rows[0].amount == Decimal("250.50")
    assert repo.rows[0].notes == "rent"


@pytest.mark.parametrize("amount", [0, -10, "abc", None, "NaN"])
def test_advance_amount_must_be_positive(amount):
    with pytest.raises(ValidationError):
        AdvanceService(InMemoryAdvances()).record_advance(labourer_id=1, amount=amount, advance_date="2026-03-05")


def test_list_advances_newest_first_within_range():
    repo = InMemoryAdvances()
    svc = AdvanceService(repo)
    svc.record_advance(labourer_id=1, amount=100, advance_date="2026-02-01")
    svc.record_advance(labourer_id=1, amount=200, advance_date="2026-03-01")
    svc.record_advance(labourer_id=2, amount=300, advance_date="2026-03-02")

    rows = svc.list_advances(start="2026-02-15")
    assert [r.amount for r in rows] == [Decimal("300"), Decimal("200")]

    rows = svc.list_advances(labourer_id=1)
    assert [r.advance_date for r in rows] == [date(2026, 3, 1), date(2026, 2, 1)]


def test_list_advances_rejects_inverted_range():
    with pytest.raises(ValidationError):
        AdvanceService(InMemoryAdvances()).list_advances(start="2026-03-02", end="2026-03-01")
