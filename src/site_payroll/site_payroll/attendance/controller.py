from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.request_utils import as_bool, json_body
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    def attendance_list():
        work_date = request.args.get("date")
        if not work_date:
            raise ValidationError("date is required")
        records = container.attendance_service.get_attendance(
            work_date=work_date,
            site_id=request.args.get("site_id"),
        )
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_submit")
    def attendance_submit():
        """Submit (and lock) one site's attendance for one day."""

        data = json_body()
        if not isinstance(data, dict):
            raise ValidationError("Request body must be an object with a records list")

        result = container.attendance_service.submit_attendance(
            data.get("records") or [],
            food_provided=as_bool(data.get("food_provided", False)),
            submitted_by=data.get("submitted_by"),
        )
        return jsonify({"success": True, "message": "Attendance marked successfully", **result.to_dict()})

    @app.route("/api/attendance/lock-status", methods=["GET"], endpoint="attendance_lock_status")
    def attendance_lock_status():
        site_id = request.args.get("site_id")
        work_date = request.args.get("date")
        if not site_id or not work_date:
            raise ValidationError("site_id and date are required")
        status = container.attendance_service.get_lock_status(site_id=site_id, work_date=work_date)
        return jsonify(status.to_dict())

    @app.route("/api/reports/site-attendance", methods=["GET"], endpoint="report_site_attendance")
    def report_site_attendance():
        rows = container.attendance_service.get_site_overview(work_date=request.args.get("date"))
        return jsonify([r.to_dict() for r in rows])
