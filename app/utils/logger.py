import logging
import json
import os
import sys
from datetime import datetime, timezone


# Extra fields copied into structured entries when passed via logger.x("msg", extra={...})
_EXTRA_KEYS = (
    "method", "path", "status", "duration_ms",
    "error", "error_type", "flow", "model", "attempt", "classification",
)


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter with correlation ID injection"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }

        correlation_id = getattr(record, "correlation_id", None) or _current_correlation_id()
        if correlation_id:
            entry["correlation_id"] = correlation_id

        for key in _EXTRA_KEYS:
            if hasattr(record, key):
                entry[key] = getattr(record, key)

        if record.levelno >= logging.WARNING:
            entry["source"] = f"{record.filename}:{record.lineno}"

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = {
                "type": type(record.exc_info[1]).__name__,
                "message": str(record.exc_info[1]),
            }

        return json.dumps(entry, default=str)


class SimpleFormatter(logging.Formatter):
    """Human-readable formatter for local development"""

    def __init__(self):
        super().__init__(
            '%(asctime)s - %(levelname)s - %(message)s',
            datefmt='%H:%M:%S'
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        details = " ".join(
            f"{key}={getattr(record, key)}" for key in _EXTRA_KEYS if hasattr(record, key)
        )
        return f"{line} [{details}]" if details else line


def _current_correlation_id() -> str:
    # Imported lazily: the middleware module imports this logger.
    from app.middleware.correlation import get_correlation_id
    return get_correlation_id()


def setup_logger(name: str = "career_advisor", level: str = None) -> logging.Logger:
    """
    Setup application logger.

    JSON lines to stdout when LOG_FORMAT=json (log drains), plain text otherwise.
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    level = level or os.getenv("LOG_LEVEL", "INFO")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    if os.getenv("LOG_FORMAT") == "json":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(SimpleFormatter())
    logger.addHandler(handler)

    return logger


logger = setup_logger()


def get_logger(name: str = None) -> logging.Logger:
    """Get logger instance"""
    if name:
        return setup_logger(name)
    return logger
