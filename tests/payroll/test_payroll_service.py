from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.site_payroll.site_payroll.core.enums import AttendanceStatus
from src.site_payroll.site_payroll.core.exceptions import ComputationError, ValidationError
from src.site_payroll.site_payroll.labourers.model import Labourer
from src.site_payroll.site_payroll.payroll.service import PayrollService
from tests.fakes import InMemoryAdvances, InMemoryAttendance, InMemoryLabourers, InMemoryOvertime

FULL = AttendanceStatus.FULL
HALF = AttendanceStatus.HALF
ABSENT = AttendanceStatus.ABSENT


class Ledgers:
    def __init__(self, *labourers: Labourer):
        self.labourers = InMemoryLabourers(list(labourers))
        self.attendance = InMemoryAttendance()
        self.overtime = InMemoryOvertime()
        self.advances = InMemoryAdvances()

    def service(self) -> PayrollService:
        return PayrollService(self.labourers, self.attendance, self.overtime, self.advances)


def _ravi(rate="500", site_id=1) -> Labourer:
    return Labourer(labourer_id=1, full_name="Ravi", rate=Decimal(rate) if rate is not None else None, site_id=site_id)


def _march_scenario(*, food_provided: bool) -> Ledgers:
    led = Ledgers(_ravi())
    led.attendance.seed(1, 1, date(2026, 3, 2), FULL)
    led.attendance.seed(1, 1, date(2026, 3, 3), HALF)
    led.attendance.seed_status(1, date(2026, 3, 2), food_provided=food_provided)
    led.attendance.seed_status(1, date(2026, 3, 3), food_provided=food_provided)
    led.overtime.seed(1, 1, date(2026, 3, 2), amount="200")
    led.advances.create(labourer_id=1, amount=Decimal("100"), advance_date=date(2026, 3, 5))
    return led


def test_net_payable_when_site_provided_food():
    led = _march_scenario(food_provided=True)

    [row] = led.service().compute_payroll_summary(start="2026-03-01", end="2026-03-31")

    assert row.current.wage == Decimal("6000")
    assert row.current.food_allowance_days == 0
    assert row.current_net_payable == Decimal("6100")
    assert row.previous_balance == Decimal("0")
    assert row.total_payable == Decimal("6100")


def test_net_payable_includes_food_allowance_when_site_did_not_provide_food():
    led = _march_scenario(food_provided=False)

    [row] = led.service().compute_payroll_summary(start="2026-03-01", end="2026-03-31")

    assert row.current.food_allowance_days == 2
    assert row.current.food_allowance_amount == Decimal("140")
    assert row.current_net_payable == Decimal("6240")


def test_previous_balance_carries_history_before_period_start():
    led = _march_scenario(food_provided=True)
    led.attendance.seed(1, 1, date(2026, 2, 20), FULL)
    led.attendance.seed_status(1, date(2026, 2, 20), food_provided=False)
    led.advances.create(labourer_id=1, amount=Decimal("1000"), advance_date=date(2026, 2, 21))

    [row] = led.service().compute_payroll_summary(start="2026-03-01", end="2026-03-31")

    # 4000 wage + 70 food - 1000 advance
    assert row.previous_balance == Decimal("3070")
    assert row.current_net_payable == Decimal("6100")
    assert row.total_payable == row.previous_balance + row.current_net_payable


def test_records_after_period_end_are_ignored():
    led = _march_scenario(food_provided=True)
    led.attendance.seed(1, 1, date(2026, 4, 1), FULL)
    led.overtime.seed(1, 1, date(2026, 4, 1), amount="999")

    [row] = led.service().compute_monthly_wage_report(month="2026-03")

    assert row.total_payable == Decimal("6100")


def test_site_filter_changes_wage_and_overtime_but_not_advances():
    led = _march_scenario(food_provided=True)
    led.attendance.seed(1, 2, date(2026, 3, 4), FULL)
    led.overtime.seed(1, 2, date(2026, 3, 4), amount="300")
    svc = led.service()

    [everywhere] = svc.compute_payroll_summary(start="2026-03-01", end="2026-03-31")
    [home_site] = svc.compute_payroll_summary(start="2026-03-01", end="2026-03-31", site_id=1)

    assert everywhere.current.wage == Decimal("10000")
    assert home_site.current.wage == Decimal("6000")
    assert everywhere.current.overtime_amount == Decimal("500")
    assert home_site.current.overtime_amount == Decimal("200")
    assert everywhere.current.advance_amount == home_site.current.advance_amount == Decimal("100")


def test_site_filter_selects_labourers_by_home_site():
    led = Ledgers(_ravi(site_id=1), Labourer(labourer_id=2, full_name="Meena", rate=Decimal("450"), site_id=2))
    # Labourer 1 worked a day at site 2 but belongs to site 1.
    led.attendance.seed(1, 2, date(2026, 3, 4), FULL)

    rows = led.service().compute_payroll_summary(start="2026-03-01", end="2026-03-31", site_id=2)

    assert [r.labourer_id for r in rows] == [2]


def test_idle_labourer_gets_zero_row():
    led = Ledgers(_ravi())

    [row] = led.service().compute_monthly_wage_report(month="2026-03")

    assert row.to_dict()["total_payable"] == 0.0
    assert (row.current.full_days, row.current.half_days, row.current.absent_days) == (0, 0, 0)


def test_missing_rate_counts_as_zero():
    led = Ledgers(_ravi(rate=None))
    led.attendance.seed(1, 1, date(2026, 3, 2), FULL)
    led.attendance.seed(1, 1, date(2026, 3, 3), ABSENT)

    [row] = led.service().compute_monthly_wage_report(month="2026-03")

    assert row.current.wage == Decimal("0")
    assert row.current.absent_days == 1
    # No status row for the day, so the site did not provide food.
    assert row.current.food_allowance_amount == Decimal("70")


def test_unreadable_rate_raises_computation_error():
    led = Ledgers(Labourer(labourer_id=1, full_name="Ravi", rate="abc", site_id=1))

    with pytest.raises(ComputationError):
        led.service().compute_monthly_wage_report(month="2026-03")


def test_month_report_covers_whole_calendar_month():
    led = Ledgers(_ravi())
    led.attendance.seed(1, 1, date(2024, 2, 1), FULL)
    led.attendance.seed(1, 1, date(2024, 2, 29), FULL)
    led.attendance.seed_status(1, date(2024, 2, 1), food_provided=True)
    led.attendance.seed_status(1, date(2024, 2, 29), food_provided=True)

    [row] = led.service().compute_monthly_wage_report(month="2024-02")

    assert row.current.full_days == 2


def test_reports_are_repeatable():
    led = _march_scenario(food_provided=False)
    svc = led.service()

    first = [r.to_dict() for r in svc.compute_payroll_summary(start="2026-03-01", end="2026-03-31")]
    second = [r.to_dict() for r in svc.compute_payroll_summary(start="2026-03-01", end="2026-03-31")]

    assert first == second


@pytest.mark.parametrize(
    "kwargs",
    [
        {"start": "2026-03-31", "end": "2026-03-01"},
        {"start": "2026-3-1", "end": "2026-03-31"},
        {"start": None, "end": "2026-03-31"},
        {"start": "2026-03-01", "end": "2026-03-31", "site_id": "x"},
    ],
)
def test_bad_period_is_rejected(kwargs):
    with pytest.raises(ValidationError):
        Ledgers(_ravi()).service().compute_payroll_summary(**kwargs)


@pytest.mark.parametrize("month", ["2026-13", "March", "", "2026/03"])
def test_bad_month_is_rejected(month):
    with pytest.raises(ValidationError):
        Ledgers(_ravi()).service().compute_monthly_wage_report(month=month)
