"""
Structured JSON logging configuration (Monolog-style).

Provides structured logging with channels (http, form, suggest, preview),
operation ID tracking, and context-rich log entries. All log output is
valid JSON written to stderr so it never mixes with console prompts.
"""

import logging
import json
import uuid
from datetime import datetime, timezone
from contextvars import ContextVar

# ──────────────────────────────────────────────────────────────
# Context variable to track the operation ID across awaits.
# Each user gesture (search, submit, update, delete, lookup) gets a
# unique UUID, which is attached to every log entry produced while it
# runs and sent to the server as X-Request-ID.
# ──────────────────────────────────────────────────────────────
operation_id_var: ContextVar[str] = ContextVar("operation_id", default="")

CHANNELS = ["http", "form", "suggest", "preview"]


class StructuredJsonFormatter(logging.Formatter):
    """
    Custom logging formatter that outputs Monolog-style JSON log entries.

    Each log line is a single JSON object containing:
    - timestamp: ISO 8601 timestamp in UTC
    - level: Log severity (INFO, WARNING, ERROR, DEBUG)
    - message: Human-readable log message
    - channel: Log source category (http, form, suggest, preview, app)
    - context: Business context (operation_id, reg_no, etc.)
    - extra: Additional metadata (status_code, duration_ms, etc.)
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z",
            "level": record.levelname,
            "message": record.getMessage(),
            "channel": getattr(record, "channel", record.name.split(".")[-1] if "." in record.name else "app"),
            "context": {
                "operation_id": operation_id_var.get(""),
                **(getattr(record, "context", {}) or {})
            },
            "extra": getattr(record, "extra_data", {}) or {}
        }
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


def setup_logging(level: str = "INFO"):
    """
    Configure the root logger and all channel-specific loggers.

    Args:
        level: Level name, normally Settings.log_level
    """
    level_name = level.upper()
    log_level = getattr(logging, level_name, logging.INFO)

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredJsonFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = [handler]

    for channel in CHANNELS:
        logging.getLogger(f"certform.{channel}").setLevel(log_level)

    return root_logger


def get_logger(channel: str) -> logging.Logger:
    """Get a channel-specific logger (http, form, suggest, preview)."""
    return logging.getLogger(f"certform.{channel}")


def log_with_context(logger: logging.Logger, level: str, message: str,
                     context: dict = None, extra_data: dict = None,
                     exc_info=None):
    """
    Emit a structured log entry with business context and extra metadata.

    This is the primary logging function used throughout the package.

    Args:
        logger: The channel logger to use
        level: Log level string (INFO, WARNING, ERROR, DEBUG)
        message: Human-readable log message
        context: Business context dict (reg_no, course_code, ...)
        extra_data: Additional metadata dict (status_code, duration_ms, ...)
        exc_info: Optional exception to attach to the entry
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.log(
        log_level,
        message,
        exc_info=exc_info,
        extra={"context": context or {}, "extra_data": extra_data or {}, "channel": logger.name.split(".")[-1]}
    )


def generate_operation_id() -> str:
    """Generate a new UUID for operation tracking."""
    return str(uuid.uuid4())


def begin_operation() -> str:
    """Start a new operation: generate an ID and bind it to the current context."""
    op_id = generate_operation_id()
    operation_id_var.set(op_id)
    return op_id
