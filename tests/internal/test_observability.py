"""Tests for structured logging setup."""

import io
import json
import logging
import sys

import pytest

from keda_connector._internal.observability import JSONFormatter, setup_logging


def make_record(msg: str = "hello", level: int = logging.INFO, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="keda_connector.test",
        level=level,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_base_fields(self):
        """Should always include timestamp, level, logger and message."""
        log = json.loads(JSONFormatter().format(make_record("started")))
        assert log["level"] == "INFO"
        assert log["logger"] == "keda_connector.test"
        assert log["message"] == "started"
        assert "timestamp" in log

    def test_connector_extras(self):
        """Should surface invocation context passed via extra."""
        record = make_record(
            "sending function invocation request failed",
            level=logging.ERROR,
            error="connection refused",
            http_endpoint="http://fn.local/",
            source="kafka-connector",
            attempt=2,
        )
        log = json.loads(JSONFormatter().format(record))
        assert log["level"] == "ERROR"
        assert log["error"] == "connection refused"
        assert log["http_endpoint"] == "http://fn.local/"
        assert log["source"] == "kafka-connector"
        assert log["attempt"] == 2

    def test_omits_absent_extras(self):
        """Should not emit keys for extras that were not set."""
        log = json.loads(JSONFormatter().format(make_record()))
        assert "error" not in log
        assert "attempt" not in log

    def test_includes_exception(self):
        """Should format exception info."""
        try:
            raise RuntimeError("kaboom")
        except RuntimeError:
            record = make_record()
            record.exc_info = sys.exc_info()
        log = json.loads(JSONFormatter().format(record))
        assert "kaboom" in log["exception"]

    def test_custom_fields(self):
        """Should surface only the configured fields."""
        record = make_record(topic="orders", error="ignored")
        log = json.loads(JSONFormatter(fields=("topic",)).format(record))
        assert log["topic"] == "orders"
        assert "error" not in log

    def test_timestamp_uses_record_time(self):
        """Should stamp the time the record was created."""
        record = make_record()
        record.created = 0.0
        log = json.loads(JSONFormatter().format(record))
        assert log["timestamp"] == "1970-01-01T00:00:00+00:00"


class TestSetupLogging:
    """Tests for setup_logging()."""

    @pytest.fixture(autouse=True)
    def restore_root(self):
        level = logging.root.level
        handlers = list(logging.root.handlers)
        yield
        logging.root.handlers[:] = handlers
        logging.root.setLevel(level)

    def test_installs_json_handler(self):
        """Should install a JSON handler at the requested level."""
        handler = setup_logging(level="debug")
        assert handler in logging.root.handlers
        assert isinstance(handler.formatter, JSONFormatter)
        assert logging.root.level == logging.DEBUG

    def test_plain_format(self):
        """Should use a plain formatter for non-json formats."""
        handler = setup_logging(fmt="text")
        assert not isinstance(handler.formatter, JSONFormatter)

    def test_unknown_level_falls_back_to_info(self):
        """Should default to INFO for unknown level names."""
        setup_logging(level="chatty")
        assert logging.root.level == logging.INFO

    def test_numeric_level(self):
        """Should accept a numeric level."""
        setup_logging(level=logging.WARNING)
        assert logging.root.level == logging.WARNING

    def test_writes_json_lines_to_stream(self):
        """Should write one JSON object per record with invocation fields."""
        stream = io.StringIO()
        setup_logging(stream=stream)

        logging.getLogger("keda_connector.test").error(
            "sending function invocation request failed",
            extra={"http_endpoint": "http://fn.local/", "source": "kafka-connector", "attempt": 1},
        )

        log = json.loads(stream.getvalue().strip())
        assert log["level"] == "ERROR"
        assert log["http_endpoint"] == "http://fn.local/"
        assert log["source"] == "kafka-connector"
        assert log["attempt"] == 1
