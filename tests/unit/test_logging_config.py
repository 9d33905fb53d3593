"""Unit tests for logging configuration."""

from __future__ import annotations

import json
import logging

import pytest

from itwin_projects.logging_config import JsonFormatter, RedactingFormatter, configure_logging


def _record(message: str, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="test.py",
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    def test_basic_fields(self) -> None:
        parsed = json.loads(JsonFormatter().format(_record("hello")))

        assert parsed["message"] == "hello"
        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "test"
        assert "timestamp" in parsed

    def test_call_fields(self) -> None:
        record = _record(
            "GET /projects -> 200",
            method="GET",
            path="/projects",
            status_code=200,
            duration_ms=12.5,
        )

        parsed = json.loads(JsonFormatter().format(record))

        assert parsed["method"] == "GET"
        assert parsed["path"] == "/projects"
        assert parsed["status_code"] == 200
        assert parsed["duration_ms"] == 12.5

    def test_operation_fields(self) -> None:
        record = _record("Retrieved 3 roles", operation="get_project_roles", record_count=3)

        parsed = json.loads(JsonFormatter().format(record))

        assert parsed["operation"] == "get_project_roles"
        assert parsed["record_count"] == 3

    def test_absent_fields_are_omitted(self) -> None:
        parsed = json.loads(JsonFormatter().format(_record("hello")))

        assert "status_code" not in parsed
        assert "record_count" not in parsed

    @pytest.mark.parametrize(
        "message",
        [
            "header Bearer eyJhbGciOi.payload.sig",
            "authorization: Bearer-less-value",
            "token=abc123",
        ],
    )
    def test_redacts_credentials(self, message: str) -> None:
        parsed = json.loads(JsonFormatter().format(_record(message)))

        assert "[REDACTED]" in parsed["message"]
        assert "eyJhbGciOi" not in parsed["message"]
        assert "abc123" not in parsed["message"]


class TestRedactingFormatter:
    def test_plain_text_is_redacted(self) -> None:
        output = RedactingFormatter("%(message)s").format(_record("using Bearer secret.jwt.value"))

        assert output == "using [REDACTED]"


class TestConfigureLogging:
    def test_installs_single_handler(self) -> None:
        configure_logging("DEBUG")
        configure_logging("WARNING")

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.WARNING
        assert isinstance(root.handlers[0].formatter, RedactingFormatter)

    def test_json_format(self) -> None:
        configure_logging("INFO", json_format=True)

        assert isinstance(logging.getLogger().handlers[0].formatter, JsonFormatter)

    def test_unknown_level_defaults_to_info(self) -> None:
        configure_logging("verbose")

        assert logging.getLogger().level == logging.INFO
