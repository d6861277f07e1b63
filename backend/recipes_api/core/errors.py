"""Problem+JSON (RFC 7807) error responses for the API.

Every error body carries ``status``, ``code``, ``detail`` and an ``error``
member holding the same text as ``detail``, plus the request id. The one
exception is the authorization gate, which answers ``401`` with no body.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException

from recipes_api.core.logger import ensure_request_id

log = logging.getLogger(__name__)

PROBLEM_MIMETYPE = "application/problem+json"

# Stable machine codes for statuses raised outside ``APIError``
STATUS_CODES: dict[int, str] = {
    HTTPStatus.BAD_REQUEST: "bad_request",
    HTTPStatus.UNAUTHORIZED: "unauthorized",
    HTTPStatus.NOT_FOUND: "not_found",
    HTTPStatus.METHOD_NOT_ALLOWED: "method_not_allowed",
    HTTPStatus.UNSUPPORTED_MEDIA_TYPE: "unsupported_media_type",
    HTTPStatus.INTERNAL_SERVER_ERROR: "internal_server_error",
}


def problem_body(
    status: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Build the problem document for one failed request.

    :param status: HTTP status code.
    :param code: Stable snake_case error code.
    :param message: Client-safe description, copied to ``detail`` and ``error``.
    :param details: Optional structured details (validation messages).
    :returns: JSON-serializable dict.
    """
    body: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": status,
        "code": code,
        "detail": message,
        "error": message,
        "instance": request.path,
        "request_id": ensure_request_id(),
    }
    if details:
        body["details"] = details
    return body


def _render(
    status: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> tuple[Response, int]:
    resp = jsonify(problem_body(status, code, message, details))
    resp.mimetype = PROBLEM_MIMETYPE
    return resp, status


class APIError(Exception):
    """
    Error raised by views and translated services.

    Subclasses fix ``status_code`` and a default ``code``; the message is
    always client-facing.
    """

    status_code: int = HTTPStatus.BAD_REQUEST
    code: str = "bad_request"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class BadRequest(APIError):
    """400: well-formed request that cannot be honoured (taken name, early refresh)."""


class Unauthorized(APIError):
    status_code = HTTPStatus.UNAUTHORIZED
    code = "unauthorized"


class NotFound(APIError):
    status_code = HTTPStatus.NOT_FOUND
    code = "not_found"


class ServerError(APIError):
    """500 whose cause is logged, never sent."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    code = "internal_server_error"


def init_app(app: Flask) -> None:
    """Register the JSON error handlers; 5xx are logged as errors, 4xx as warnings."""

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        if err.status_code >= 500:
            log.error(
                "api_error code=%s status=%s",
                err.code,
                err.status_code,
                exc_info=err.__cause__ or err,
            )
        else:
            log.warning("api_error code=%s status=%s", err.code, err.status_code)
        return _render(err.status_code, err.code, err.message)

    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        fields = sorted(err.messages) if isinstance(err.messages, dict) else []
        log.warning("validation_error fields=%s", fields)
        return _render(
            HTTPStatus.BAD_REQUEST,
            "validation_error",
            "Validation failed",
            {"errors": err.messages},
        )

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = err.code or HTTPStatus.INTERNAL_SERVER_ERROR
        code = STATUS_CODES.get(status, "error")
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        else:
            message = (err.description or HTTPStatus(status).phrase).strip()
        log.warning("http_error code=%s status=%s", code, status)
        return _render(status, code, message)

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        log.error("unhandled_exception", exc_info=err)
        return _render(HTTPStatus.INTERNAL_SERVER_ERROR, "internal_server_error", "Unexpected error")
