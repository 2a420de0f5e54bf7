"""Structured JSON logging with correlation ID support.

Every record is emitted as one JSON object on stdout. Domain code attaches
context through ``extra={"extra_fields": {...}}``.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

from .correlation import get_correlation_id

_ROOT_LOGGER = "roombooking"


class JsonFormatter(logging.Formatter):
    """JSON formatter that includes the request correlation ID."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        correlation_id = get_correlation_id()
        if correlation_id:
            log_obj["correlationId"] = correlation_id

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        extra_fields = getattr(record, "extra_fields", None)
        if extra_fields:
            log_obj.update(extra_fields)

        return json.dumps(log_obj, default=str)


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach the JSON handler to the package root logger.

    Idempotent. Records stop at the package logger so a server that also
    configures the root logger (uvicorn --log-config) does not print them twice. The level defaults to LOG_LEVEL (INFO when unset).
    """
    root = logging.getLogger(_ROOT_LOGGER)
    if not any(isinstance(h.formatter, JsonFormatter) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonFormatter())
        root.addHandler(handler)
    root.propagate = False
    root.setLevel((level or os.environ.get("LOG_LEVEL") or "INFO").upper())
    return root


def get_logger(name: str) -> logging.Logger:
    """Get a module logger; records propagate to the package root logger."""
    return logging.getLogger(name)
