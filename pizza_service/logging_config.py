"""
Logging configuration for the pizza service.

Every log line carries the ID of the HTTP request that produced it (or ``-``
outside a request), so a single order can be followed from the auth check
through the factory call. ``RequestIDMiddleware`` sets the ID; the filter
installed here copies it onto each record.

Usage:
    from pizza_service.logging_config import setup_logging
    setup_logging()  # Call once at application startup

Environment variables:
    LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, or CRITICAL, any case (default: INFO)
"""
import logging
import os
import sys
from contextvars import ContextVar
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Loggers that are chatty below WARNING: per-connection and per-statement lines
NOISY_LOGGERS = ("urllib3", "sqlalchemy.engine", "multipart")

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIDFilter(logging.Filter):
    """Stamp each record with the current request ID."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


def resolve_level(level: Optional[str] = None) -> str:
    """Normalize ``level`` (or ``LOG_LEVEL``) to a known level name, else INFO."""
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    level = level.strip().upper()
    return level if level in LEVELS else "INFO"


def setup_logging(level: Optional[str] = None) -> None:
    level = resolve_level(level)
    numeric_level = getattr(logging, level)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    # No-op when the root logger already has handlers (uvicorn, pytest)
    logging.basicConfig(level=numeric_level, handlers=[handler])

    logging.getLogger("pizza_service").setLevel(numeric_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET if level == "DEBUG" else logging.WARNING)

    logging.getLogger(__name__).debug("Logging configured at %s level", level)
