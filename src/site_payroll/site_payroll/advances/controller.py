from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.request_utils import json_body
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/advances", methods=["GET"], endpoint="advances_list")
    def advances_list():
        rows = container.advance_service.list_advances(
            labourer_id=request.args.get("labourer_id"),
            start=request.args.get("start_date"),
            end=request.args.get("end_date"),
        )
        return jsonify([r.to_dict() for r in rows])

    @app.route("/api/advances", methods=["POST"], endpoint="advances_create")
    def advances_create():
        data = json_body()
        if not isinstance(data, dict):
            raise ValidationError("Request body must be an object")

        advance_id = container.advance_service.record_advance(
            labourer_id=data.get("labourer_id"),
            amount=data.get("amount"),
            advance_date=data.get("date"),
            notes=data.get("notes"),
            created_by=data.get("created_by"),
        )
        return jsonify({"success": True, "advance_id": advance_id}), 201
