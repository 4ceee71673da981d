from __future__ import annotations

from flask import Flask, jsonify, request

from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reports/labour-summary", methods=["GET"], endpoint="report_labour_summary")
    def report_labour_summary():
        start = request.args.get("start_date")
        end = request.args.get("end_date")
        if not start or not end:
            raise ValidationError("start_date and end_date are required")

        rows = container.payroll_service.compute_payroll_summary(
            start=start,
            end=end,
            site_id=request.args.get("site_id"),
        )
        return jsonify([r.to_dict() for r in rows])

    @app.route("/api/reports/wage-month", methods=["GET"], endpoint="report_wage_month")
    def report_wage_month():
        month = request.args.get("month")
        if not month:
            raise ValidationError("month is required (YYYY-MM)")

        rows = container.payroll_service.compute_monthly_wage_report(
            month=month,
            site_id=request.args.get("site_id"),
        )
        return jsonify([r.to_dict() for r in rows])
