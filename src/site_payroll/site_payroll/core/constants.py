"""Payroll units, money defaults and date formats."""

from decimal import Decimal

FULL_DAY_UNITS = 8
HALF_DAY_UNITS = 4

DEFAULT_FOOD_ALLOWANCE_AMOUNT = Decimal("70")

DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"

DEFAULT_ADVANCE_LIST_LIMIT = 500
