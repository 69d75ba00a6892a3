"""JSON logging on stdout, correlated per request.

Every record carries ``request_id``. The id is taken from ``X-Request-ID`` or
``X-Correlation-ID`` when the client sends a well-formed one, otherwise a
fresh UUID4 is minted, and it is echoed back on the response. Each finished
request also emits one ``request.completed`` line.
"""

from __future__ import annotations

import json
import logging
import re
import sys
from datetime import datetime, timezone
from typing import IO, Any
from uuid import uuid4

from flask import Flask, Response, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADERS = ("X-Request-ID", "X-Correlation-ID")
EXTRA_KEYS = ("endpoint", "elapsed_ms", "account_id", "method", "path", "status")

# Client-supplied ids end up in log lines; anything else is replaced.
_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._\-]{1,128}$")

access_log = logging.getLogger("vidtube.access")


class JSONFormatter(logging.Formatter):
    """Render a record as one JSON object; only whitelisted extras are kept."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        payload.update({key: getattr(record, key) for key in EXTRA_KEYS if hasattr(record, key)})
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = ensure_request_id() if has_request_context() else None
        return True


def _incoming_request_id() -> str | None:
    for header in CORRELATION_HEADERS:
        value = (request.headers.get(header) or "").strip()
        if value and _REQUEST_ID_RE.match(value):
            return value
    return None


def ensure_request_id() -> str:
    """Return the id of the current request, assigning one on first use.

    Outside a request a fresh UUID is returned each call.
    """
    if not has_request_context():
        return str(uuid4())
    request_id = g.get("request_id")
    if request_id is None:
        request_id = _incoming_request_id() or str(uuid4())
        g.request_id = request_id
    return request_id


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: str | int = "INFO", *, stream: IO[str] | None = None) -> None:
    """Install the JSON handler on the root logger.

    :param level: Level name or number; unknown names fall back to ``INFO``.
    :param stream: Output stream, ``sys.stdout`` by default.
    """
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestIdFilter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_resolve_level(level))


def init_app(app: Flask) -> None:
    """Assign request ids, echo them, and log one line per finished request."""

    app.logger.addFilter(RequestIdFilter())

    @app.before_request
    def _assign_request_id() -> None:
        ensure_request_id()

    @app.after_request
    def _finish_request(response: Response) -> Response:
        request_id = ensure_request_id()
        response.headers.setdefault(REQUEST_ID_HEADER, request_id)
        access_log.info(
            "request.completed",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.path,
                "status": response.status_code,
            },
        )
        return response


__all__ = ["configure_logging", "init_app", "ensure_request_id", "JSONFormatter"]
