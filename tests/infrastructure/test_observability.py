"""Structured Logging — JSON formatter and idempotent setup."""

import json
import logging

from skillswap.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "skillswap.test", logging.INFO, __file__, 1, "hello %s", ("world",), None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_core_fields():
    data = json.loads(JSONFormatter().format(_record()))
    assert data["level"] == "INFO"
    assert data["logger"] == "skillswap.test"
    assert data["message"] == "hello world"
    assert "timestamp" in data


def test_json_formatter_surfaces_extra_fields():
    data = json.loads(JSONFormatter().format(
        _record(user_id="u1", error_code="CONFLICT", unrelated="x"),
    ))
    assert data["user_id"] == "u1"
    assert data["error_code"] == "CONFLICT"
    assert "unrelated" not in data


def test_setup_logging_is_idempotent():
    setup_logging("DEBUG", "json")
    setup_logging("INFO", "text")
    named = [h for h in logging.root.handlers if h.get_name() == "skillswap"]
    assert len(named) == 1
    assert logging.root.level == logging.INFO
