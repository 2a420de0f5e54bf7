"""Tests for JSON logging and correlation IDs."""

import json
import logging
import sys

from roombooking.observability.correlation import (
    bind_correlation_id,
    get_correlation_id,
    unbind_correlation_id,
)
from roombooking.observability.logging import JsonFormatter, configure_logging


def _record(msg="reservation created", **extra):
    record = logging.LogRecord("roombooking.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    def test_basic_fields(self):
        payload = json.loads(JsonFormatter().format(_record()))

        assert payload["level"] == "INFO"
        assert payload["logger"] == "roombooking.test"
        assert payload["message"] == "reservation created"
        assert "timestamp" in payload
        assert "correlationId" not in payload

    def test_extra_fields_merged(self):
        payload = json.loads(
            JsonFormatter().format(_record(extra_fields={"reservation_id": 42, "room_id": 7}))
        )

        assert payload["reservation_id"] == 42
        assert payload["room_id"] == 7

    def test_correlation_id_included(self):
        cid, token = bind_correlation_id("req-1")
        try:
            payload = json.loads(JsonFormatter().format(_record()))
        finally:
            unbind_correlation_id(token)

        assert cid == "req-1"
        assert payload["correlationId"] == "req-1"

    def test_exception_rendered(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record()
            record.exc_info = sys.exc_info()

        payload = json.loads(JsonFormatter().format(record))

        assert "RuntimeError: boom" in payload["exception"]


class TestCorrelation:
    def test_generated_when_missing(self):
        cid, token = bind_correlation_id(None)
        try:
            assert len(cid) == 36
            assert get_correlation_id() == cid
        finally:
            unbind_correlation_id(token)
        assert get_correlation_id() == ""


class TestConfigureLogging:
    def test_idempotent(self):
        root = configure_logging("debug")
        configure_logging("debug")

        json_handlers = [h for h in root.handlers if isinstance(h.formatter, JsonFormatter)]
        assert len(json_handlers) == 1
        assert root.level == logging.DEBUG
        configure_logging("info")

    def test_records_do_not_reach_root_logger(self):
        root = configure_logging()
        assert root.propagate is False

        seen = []

        class _Collect(logging.Handler):
            def emit(self, record):
                seen.append(record)

        collector = _Collect()
        logging.getLogger().addHandler(collector)
        try:
            logging.getLogger("roombooking.domain.reservations").warning("reservation created")
        finally:
            logging.getLogger().removeHandler(collector)

        assert seen == []
