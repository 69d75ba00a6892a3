"""Unit tests for the logging utility."""

from __future__ import annotations

import json
import logging

from vidtube.core.logger import JSONFormatter, configure_logging


def test_configure_logging_sets_level() -> None:
    """``configure_logging`` should set the root logger level."""

    # Act
    configure_logging("DEBUG")

    # Assert
    assert logging.getLogger().level == logging.DEBUG


def test_json_formatter_includes_known_extras() -> None:
    record = logging.LogRecord("vidtube.test", logging.INFO, __file__, 1, "hello %s", ("x",), None)
    record.account_id = 42
    record.request_id = "req-1"
    record.unrelated = "dropped"

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "hello x"
    assert payload["level"] == "INFO"
    assert payload["request_id"] == "req-1"
    assert payload["account_id"] == 42
    assert "unrelated" not in payload


def test_request_id_is_echoed(client) -> None:
    response = client.get("/api/v1/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


def test_request_id_is_generated(client) -> None:
    response = client.get("/api/v1/health")
    assert response.headers["X-Request-ID"]


def test_malformed_request_id_is_replaced(client) -> None:
    response = client.get("/api/v1/health", headers={"X-Request-ID": "bad id forged=1"})
    assert response.headers["X-Request-ID"] != "bad id forged=1"
    assert " " not in response.headers["X-Request-ID"]


def test_correlation_header_is_accepted(client) -> None:
    response = client.get("/api/v1/health", headers={"X-Correlation-ID": "corr-7"})
    assert response.headers["X-Request-ID"] == "corr-7"


def test_completed_request_is_logged(client, caplog) -> None:
    caplog.set_level(logging.INFO, logger="vidtube.access")

    client.get("/api/v1/health", headers={"X-Request-ID": "req-9"})

    (record,) = [r for r in caplog.records if r.name == "vidtube.access"]
    assert record.getMessage() == "request.completed"
    assert record.status == 200
    assert record.path == "/api/v1/health"
    assert record.request_id == "req-9"


def test_unknown_level_name_falls_back_to_info() -> None:
    configure_logging("chatty")
    assert logging.getLogger().level == logging.INFO
