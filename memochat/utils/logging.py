"""Structured logging with JSON output.

Every record is emitted as a single JSON object on stderr, which keeps the
logs greppable and easy to ship to an aggregator. Records logged while
handling a request carry a request_id so the chat flow for one call (fact load,
tone, generation, history write) can be correlated.
"""

import json
import logging
import sys
import traceback
from contextvars import ContextVar
from typing import Any, cast

from flask import g, has_request_context

# Request ID outside a Flask request context (scripts, background threads)
request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)

# LogRecord attributes that are not user-supplied extra fields
_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "exc_info",
        "exc_text",
        "stack_info",
        "taskName",
    }
)

# Third-party loggers that are too chatty at INFO
_NOISY_LOGGERS = ("httpx", "httpcore", "urllib3", "google", "langchain", "yoyo")


def get_request_id() -> str | None:
    """Get the current request ID from context.

    Flask's ``g`` wins while a request is being handled. Outside of one the
    context variable is used.
    """
    if has_request_context() and hasattr(g, "request_id"):
        return cast(str | None, g.request_id)
    return request_id_var.get()


def set_request_id(request_id: str) -> None:
    """Set the request ID in context."""
    request_id_var.set(request_id)
    if has_request_context():
        g.request_id = request_id


def clear_request_id() -> None:
    """Forget the request ID once a request is done.

    The test client and threaded servers reuse the same thread for later work,
    which would otherwise be logged under the previous request's ID.
    """
    request_id_var.set(None)


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = get_request_id()
        if request_id:
            log_data["request_id"] = request_id

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": traceback.format_exception(*record.exc_info),
            }

        # Anything passed via extra= lands in the record's __dict__
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_data[key] = value

        # default=str covers paths, enums and other non-JSON values in extras
        return json.dumps(log_data, default=str)


def setup_logging() -> None:
    """Configure structured logging for the application.

    Replaces any handlers on the root logger, so calling it again (every
    create_app() does) does not duplicate output.
    """
    from memochat.config import Config

    log_level = getattr(logging, Config.LOG_LEVEL, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    # stderr, stdout is often captured by process managers
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(console_handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)


def log_payload_snippet(
    logger: logging.Logger, payload: dict[str, Any], max_length: int = 500
) -> None:
    """Log a truncated JSON rendering of a payload at debug level.

    Args:
        logger: The logger instance
        payload: The payload to log
        max_length: Maximum length of the snippet
    """
    try:
        payload_str = json.dumps(payload, default=str)
    except (TypeError, ValueError):
        logger.debug("Failed to serialize payload for logging")
        return
    if len(payload_str) > max_length:
        payload_str = payload_str[:max_length] + "..."
    logger.debug("Payload snippet", extra={"payload_snippet": payload_str})
