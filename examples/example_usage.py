"""Print a month's wage sheet straight from the service layer (no Flask).

Usage: python examples/example_usage.py [YYYY-MM] [site_id]
"""

import importlib
import sys
from datetime import date

from config import get_settings_module

from src.site_payroll.site_payroll.container import build_container


def main(argv):
    month = argv[1] if len(argv) > 1 else date.today().strftime("%Y-%m")
    site_id = argv[2] if len(argv) > 2 else None

    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    rows = container.payroll_service.compute_monthly_wage_report(month=month, site_id=site_id)
    print(f"{'Labourer':<24}{'Days':>8}{'Wage':>12}{'Previous':>12}{'Total':>12}")
    for row in rows:
        days = row.current.full_days + row.current.half_days / 2
        print(
            f"{row.name:<24}{days:>8.1f}{row.current.wage:>12.2f}"
            f"{row.previous_balance:>12.2f}{row.total_payable:>12.2f}"
        )


if __name__ == "__main__":
    main(sys.argv)
