"""JSON error responses for the HTTP layer.

Clients must be able to tell a locked day (409, not retryable) from bad input
(400) and from an unavailable store (503, retryable).
"""

from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from ..core.exceptions import ComputationError, ConflictError, DomainError, StoreError, ValidationError

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (ConflictError, 409),
    (StoreError, 503),
    (ComputationError, 500),
)


def error_payload(kind: str, message: str) -> dict:
    return {"success": False, "error": kind, "message": message}


def _domain_error_handler(exc: DomainError):
    status = next((code for cls, code in _STATUS_BY_ERROR if isinstance(exc, cls)), 500)
    if status >= 500:
        logger.error("%s: %s", exc.kind, exc)
    return jsonify(error_payload(exc.kind, str(exc))), status


def _http_exception_handler(exc: HTTPException):
    return jsonify(error_payload("http_error", exc.description or exc.name)), exc.code or 500


def _generic_exception_handler(exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    return jsonify(error_payload("internal_error", "Internal server error")), 500


def register_error_handlers(app: Flask) -> None:
    app.register_error_handler(DomainError, _domain_error_handler)
    app.register_error_handler(HTTPException, _http_exception_handler)
    app.register_error_handler(Exception, _generic_exception_handler)
