"""
Logging configuration module.

Structured logging for the console process:
- Console logging (text in development, JSON for log aggregation)
- Optional rotating log files, with errors copied to a separate file
- A correlation id on every record: the request id inside a request, the
  asyncio task name (heartbeat, stats poll, presence) in background work
"""

import asyncio
import logging
import logging.config
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Optional

from campus_console.core.config import Settings, settings

# Set by RequestIDMiddleware for the duration of a request
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

NO_CORRELATION_ID = "no-request-id"

TEXT_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(correlation_id)s] - %(funcName)s() - %(message)s"
)
JSON_FORMAT = (
    "%(asctime)s %(name)s %(levelname)s %(correlation_id)s "
    "%(filename)s %(lineno)d %(funcName)s %(message)s"
)

# Third-party loggers and the level they are kept at
LIBRARY_LEVELS = {
    "uvicorn": "INFO",
    "uvicorn.access": "INFO",
    "httpx": "WARNING",  # INFO logs every backend and SMS request
}


def current_correlation_id() -> str:
    """Request id of the current request, else the name of the running task."""
    request_id = request_id_var.get()
    if request_id:
        return request_id
    try:
        task = asyncio.current_task()
    except RuntimeError:
        task = None
    return task.get_name() if task is not None else NO_CORRELATION_ID


class CorrelationIdFilter(logging.Filter):
    """Logging filter adding ``correlation_id`` to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = current_correlation_id()
        return True


def _rotating_file(path: Path, level: str, formatter: str, config: Settings) -> dict[str, Any]:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "level": level,
        "formatter": formatter,
        "filename": str(path),
        "maxBytes": config.log_file_max_bytes,
        "backupCount": config.log_file_backup_count,
        "encoding": "utf-8",
        "filters": ["correlation_id"],
    }


def get_logging_config(config: Settings = settings) -> dict[str, Any]:
    """
    Build the logging configuration.

    Args:
        config: Settings to read levels, format and file options from

    Returns:
        Dictionary compatible with logging.config.dictConfig()
    """
    formatter = "json" if config.log_format == "json" else "text"
    handlers = ["console"]

    handler_config: dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": config.log_level,
            "formatter": formatter,
            "stream": sys.stdout,
            "filters": ["correlation_id"],
        },
    }

    if config.log_file_enabled:
        log_path = Path(config.log_file_path)
        handler_config["file"] = _rotating_file(log_path, config.log_level, formatter, config)
        handler_config["error_file"] = _rotating_file(
            log_path.parent / "error.log", "ERROR", formatter, config
        )
        handlers += ["file", "error_file"]

    loggers: dict[str, Any] = {
        name: {"level": level, "handlers": ["console"], "propagate": False}
        for name, level in LIBRARY_LEVELS.items()
    }
    loggers["campus_console"] = {
        "level": config.log_level,
        "handlers": list(handlers),
        "propagate": False,
    }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "text": {"format": TEXT_FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
            "json": {
                "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
                "format": JSON_FORMAT,
            },
        },
        "filters": {
            "correlation_id": {"()": CorrelationIdFilter},
        },
        "handlers": handler_config,
        "root": {"level": config.log_level, "handlers": list(handlers)},
        "loggers": loggers,
    }


def setup_logging(config: Settings = settings) -> None:
    """
    Configure application logging.

    Call this at startup, before the console is built.
    """
    if config.log_file_enabled:
        Path(config.log_file_path).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(get_logging_config(config))

    logging.getLogger(__name__).info(
        f"Logging configured: level={config.log_level}, format={config.log_format}, "
        f"file_enabled={config.log_file_enabled}"
    )
