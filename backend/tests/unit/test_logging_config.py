"""Unit tests for structured logging and the explicit work context"""

import json
import logging
import sys

from observability.logging_config import JSONFormatter, PlainFormatter
from observability.work_context import WorkContext, generate_request_id


def _record(message="Uploaded file", exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="workers.email_worker",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=(),
        exc_info=exc_info,
        func="handle",
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestWorkContext:

    def test_log_extra_skips_missing_fields(self):
        ctx = WorkContext(correlation_id="corr-1", transaction_id="t-1")

        assert ctx.log_extra() == {"correlation_id": "corr-1", "transaction_id": "t-1"}

    def test_with_correlation_returns_copy(self):
        ctx = WorkContext(file_id="F1")

        updated = ctx.with_correlation("corr-2")

        assert updated.correlation_id == "corr-2"
        assert updated.file_id == "F1"
        assert ctx.correlation_id is None

    def test_generate_request_id(self):
        assert generate_request_id() != generate_request_id()


class TestJSONFormatter:

    def test_correlation_fields(self):
        extra = WorkContext(correlation_id="corr-1", file_id="F1", business_area_cd="DPS").log_extra()

        data = json.loads(JSONFormatter().format(_record(**extra)))

        assert data["message"] == "Uploaded file"
        assert data["level"] == "INFO"
        assert data["logger"] == "workers.email_worker"
        assert data["correlation_id"] == "corr-1"
        assert data["file_id"] == "F1"
        assert data["business_area_cd"] == "DPS"
        assert "transaction_id" not in data

    def test_exception_info(self):
        try:
            raise ValueError("bad metadata")
        except ValueError:
            exc_info = sys.exc_info()

        data = json.loads(JSONFormatter().format(_record(exc_info=exc_info)))

        assert data["error"] == "bad metadata"
        assert "ValueError" in data["traceback"]


class TestPlainFormatter:

    def test_appends_tags(self):
        line = PlainFormatter().format(_record(correlation_id="corr-1"))

        assert line.endswith("Uploaded file [correlation_id=corr-1]")

    def test_without_tags(self):
        assert PlainFormatter().format(_record()).endswith("Uploaded file")
