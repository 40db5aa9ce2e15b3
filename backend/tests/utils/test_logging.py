# tests/utils/test_logging.py
"""
Tests for logging helpers.

Tests:
- Correlation ID filter
- JSON formatter output (context, extras, non-JSON values)
- Log level parsing
"""

import json
import logging
from decimal import Decimal

import pytest

from fundtracker.utils import get_logger
from fundtracker.utils.context import (
    clear_correlation_id,
    clear_request_context,
    set_correlation_id,
    set_request_context,
)
from fundtracker.utils.logging import (
    NO_CORRELATION_ID,
    CorrelationIdFilter,
    JsonFormatter,
    _get_log_level,
)


def _record(message: str = "Rebalanced 2025-11", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="fundtracker.services.ownership",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture(autouse=True)
def clean_context():
    yield
    clear_correlation_id()
    clear_request_context()


class TestCorrelationIdFilter:

    def test_stamps_current_id(self):
        set_correlation_id("abc-123")
        record = _record()

        assert CorrelationIdFilter().filter(record) is True
        assert record.correlation_id == "abc-123"

    def test_placeholder_outside_request(self):
        record = _record()
        CorrelationIdFilter().filter(record)

        assert record.correlation_id == NO_CORRELATION_ID


class TestJsonFormatter:

    def test_basic_fields(self):
        record = _record()
        CorrelationIdFilter().filter(record)

        entry = json.loads(JsonFormatter().format(record))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "fundtracker.services.ownership"
        assert entry["message"] == "Rebalanced 2025-11"
        assert entry["correlation_id"] == NO_CORRELATION_ID
        assert "extra" not in entry

    def test_request_context_included(self):
        set_request_context("participant_id", 3)

        entry = json.loads(JsonFormatter().format(_record()))

        assert entry["context"] == {"participant_id": 3}

    def test_extras_are_stringified_when_needed(self):
        entry = json.loads(JsonFormatter().format(_record(total=Decimal("100.5"), year=2025)))

        assert entry["extra"] == {"total": "100.5", "year": 2025}


class TestLogLevels:

    @pytest.mark.parametrize(
        "name,level",
        [("debug", logging.DEBUG), (" INFO ", logging.INFO), ("warn", logging.WARNING)],
    )
    def test_known_levels(self, name, level):
        assert _get_log_level(name) == level

    def test_unknown_level(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            _get_log_level("chatty")

    def test_get_logger_returns_named_logger(self):
        assert get_logger("fundtracker.test").name == "fundtracker.test"
