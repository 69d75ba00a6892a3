"""Centralized JSON error handling for the API.

Every failure leaves the application as the error envelope::

    {"status": 404, "message": "User does not exist", "success": false}

with the same status on the transport line. Route handlers never catch their
own top-level errors; the handlers registered here are the only wrapper.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from vidtube.core.logger import ensure_request_id
from vidtube.services._shared.errors import ServiceError

log = logging.getLogger(__name__)


def error_envelope(
    status: int,
    message: str,
    *,
    errors: Any = None,
) -> Response:
    """
    Build the JSON error response.

    :param status: HTTP status code, mirrored in the body.
    :param message: Human-readable error summary (safe for clients).
    :param errors: Optional structured details.
    :returns: Flask response with ``status`` applied.
    :rtype: flask.Response
    """
    payload: dict[str, Any] = {
        "status": int(status),
        "message": message,
        "success": False,
    }
    if errors:
        payload["errors"] = errors
    response = jsonify(payload)
    response.status_code = int(status)
    return response


def init_app(app: Flask) -> None:
    """
    Attach JSON error handlers to the Flask app.

    Notes
    -----
    - 4xx are logged as warnings without traceback.
    - 5xx are logged as errors with ``exc_info``; their detail never reaches
      the client.
    """

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        if err.status_code >= 500:
            log.error(
                "ServiceError: code=%s status=%s msg=%s request_id=%s",
                err.code,
                err.status_code,
                err.message,
                ensure_request_id(),
                exc_info=err,
            )
        else:
            log.warning(
                "ServiceError: code=%s status=%s msg=%s request_id=%s",
                err.code,
                err.status_code,
                err.message,
                ensure_request_id(),
            )
        return error_envelope(err.status_code, err.message, errors=err.errors)

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        log.warning("ValidationError: request_id=%s", ensure_request_id())
        return error_envelope(
            HTTPStatus.BAD_REQUEST,
            "Request validation failed",
            errors=err.messages,
        )

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        # Raw DB error stays out of the response
        log.warning("IntegrityError: request_id=%s detail=%s", ensure_request_id(), err.orig)
        return error_envelope(HTTPStatus.CONFLICT, "Resource conflict")

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        log.error("OperationalError: request_id=%s", ensure_request_id(), exc_info=err)
        return error_envelope(HTTPStatus.SERVICE_UNAVAILABLE, "Service temporarily unavailable")

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        message = (err.description or HTTPStatus(status).phrase).strip()
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        level = log.error if status >= 500 else log.warning
        level(
            "HTTPException: status=%s detail=%s request_id=%s",
            status,
            message,
            ensure_request_id(),
        )
        return error_envelope(status, message)

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        # Unexpected server-side error; never leak internal details
        log.error("Unhandled exception: request_id=%s", ensure_request_id(), exc_info=err)
        return error_envelope(HTTPStatus.INTERNAL_SERVER_ERROR, "Internal server error")
