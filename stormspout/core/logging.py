"""Structured JSON logging for stormspout."""

import json
import logging
from datetime import UTC, datetime
from typing import Any

_STANDARD_LOGRECORD_KEYS: frozenset[str] = frozenset(
    logging.LogRecord(
        name="", level=0, pathname="", lineno=0, msg="", args=(), exc_info=None
    ).__dict__.keys()
)


class JSONFormatter(logging.Formatter):
    """JSON formatter with UTC ISO8601 timestamps."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }

        for field in ("component", "command", "tuple_id", "stream"):
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in vars(record).items():
            if key not in _STANDARD_LOGRECORD_KEYS and key not in log_data:
                log_data[key] = value

        try:
            return json.dumps(log_data, default=str)
        except (TypeError, ValueError):
            return str(log_data)


def _setup_json_handler(logger: logging.Logger, level: int) -> None:
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


def configure_dispatcher_logger(level: int = logging.INFO) -> logging.Logger:
    """Configure and return the dispatcher logger with JSON formatting.

    Args:
        level: The logging level to set. Defaults to logging.INFO.
    """
    logger = logging.getLogger("stormspout.dispatcher")
    _setup_json_handler(logger, level)
    return logger
