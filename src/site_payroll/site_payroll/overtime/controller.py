from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.request_utils import json_body
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/overtime", methods=["GET"], endpoint="overtime_list")
    def overtime_list():
        work_date = request.args.get("date")
        if not work_date:
            raise ValidationError("date is required")
        records = container.overtime_service.get_overtime(work_date=work_date, site_id=request.args.get("site_id"))
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/overtime", methods=["POST"], endpoint="overtime_save")
    def overtime_save():
        # Accepts a single record or a list of records.
        count = container.overtime_service.save_overtime(json_body())
        return jsonify({"success": True, "message": "Overtime records saved successfully", "count": count})
