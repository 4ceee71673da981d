from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional, Sequence

from ..advances.repository import AdvanceRepository
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import DateWindow, coerce_date, month_bounds
from ..common.validators import optional_id, to_money
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..labourers.model import Labourer
from ..labourers.repository import LabourerRepository
from ..overtime.repository import OvertimeRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollSummary, PeriodTotals

logger = logging.getLogger(__name__)


class PayrollService:
    """Payroll aggregation over the attendance, overtime and advance ledgers.

    Read-only: nothing here writes, so reports can run concurrently and be
    repeated. Every figure is recomputed from the ledgers on each call,
    including the previous balance, which re-scans all history before the
    period start.

    Site filtering applies to attendance, overtime and food allowance. It never
    applies to advances, which are not tied to a site.
    """

    def __init__(
        self,
        labourers: LabourerRepository,
        attendance: AttendanceRepository,
        overtime: OvertimeRepository,
        advances: AdvanceRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._labourers = labourers
        self._attendance = attendance
        self._overtime = overtime
        self._advances = advances
        self._calculator = calculator or StandardPayrollCalculator()

    def compute_period_totals(
        self,
        labourer: Labourer,
        window: DateWindow,
        *,
        site_id: Optional[int] = None,
        food_provided: Optional[set[tuple[int, date]]] = None,
    ) -> PeriodTotals:
        counts = self._attendance.count_by_status(labourer_id=labourer.labourer_id, window=window, site_id=site_id)
        full_days = int(counts.get(AttendanceStatus.FULL, 0))
        half_days = int(counts.get(AttendanceStatus.HALF, 0))
        absent_days = int(counts.get(AttendanceStatus.ABSENT, 0))

        rate = to_money(labourer.rate)
        wage = self._calculator.wage(full_days=full_days, half_days=half_days, rate=rate)

        overtime_amount = to_money(
            self._overtime.sum_amount(labourer_id=labourer.labourer_id, window=window, site_id=site_id)
        )
        advance_amount = to_money(self._advances.sum_amount(labourer_id=labourer.labourer_id, window=window))

        if food_provided is None:
            food_provided = self._attendance.food_provided_days(window=window, site_id=site_id)
        worked_days = self._attendance.list_worked_days(labourer_id=labourer.labourer_id, window=window, site_id=site_id)
        food_days = self._calculator.food_allowance_days(worked_days, food_provided)

        return PeriodTotals(
            full_days=full_days,
            half_days=half_days,
            absent_days=absent_days,
            wage=wage,
            overtime_amount=overtime_amount,
            food_allowance_days=food_days,
            food_allowance_amount=self._calculator.food_allowance_amount(food_days),
            advance_amount=advance_amount,
        )

    def compute_payroll(
        self,
        labourer: Labourer,
        period_start: date,
        period_end: date,
        *,
        site_id: Optional[int] = None,
        food_provided: Optional[set[tuple[int, date]]] = None,
    ) -> PayrollSummary:
        if food_provided is None:
            food_provided = self._attendance.food_provided_days(window=DateWindow(end=period_end), site_id=site_id)

        current = self.compute_period_totals(
            labourer,
            DateWindow.between(period_start, period_end),
            site_id=site_id,
            food_provided=food_provided,
        )
        previous = self.compute_period_totals(
            labourer,
            DateWindow.history_before(period_start),
            site_id=site_id,
            food_provided=food_provided,
        )
        return PayrollSummary(
            labourer_id=labourer.labourer_id,
            name=labourer.full_name,
            site_id=labourer.site_id,
            rate=to_money(labourer.rate),
            current=current,
            previous_balance=previous.net_payable,
        )

    def compute_payroll_summary(self, *, start: Any, end: Any, site_id: Any = None) -> list[PayrollSummary]:
        """One summary per labourer whose home site is site_id (all labourers when unset).

        A labourer who only visited site_id, with another home site, gets no row here.
        """
        period_start = coerce_date(start, "start_date")
        period_end = coerce_date(end, "end_date")
        if period_end < period_start:
            raise ValidationError("end_date must be on or after start_date")
        return self._report(period_start, period_end, optional_id(site_id, "site_id"))

    def compute_monthly_wage_report(self, *, month: str, site_id: Any = None) -> list[PayrollSummary]:
        period_start, period_end = month_bounds(month)
        return self._report(period_start, period_end, optional_id(site_id, "site_id"))

    def _report(self, period_start: date, period_end: date, site_id: Optional[int]) -> list[PayrollSummary]:
        logger.debug("Computing payroll for %s..%s (site=%s)", period_start, period_end, site_id)

        labourers: Sequence[Labourer] = self._labourers.list_labourers(site_id=site_id)
        # Food flags up to the period end cover both the period and the carry-forward.
        food_provided = self._attendance.food_provided_days(window=DateWindow(end=period_end), site_id=site_id)

        return [
            self.compute_payroll(lab, period_start, period_end, site_id=site_id, food_provided=food_provided)
            for lab in labourers
        ]
