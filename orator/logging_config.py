"""Structured JSON logging configuration."""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

# Context variables for conversation tracing
session_id_var: ContextVar[str | None] = ContextVar("session_id", default=None)
scenario_var: ContextVar[str | None] = ContextVar("scenario", default=None)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname.lower(),
            "message": record.getMessage(),
            "logger": record.name,
        }

        # Add service from extra or derive from logger name
        log_data["service"] = getattr(record, "service", record.name.split(".")[0])

        if session_id := session_id_var.get():
            log_data["session_id"] = session_id
        if scenario := scenario_var.get():
            log_data["scenario"] = scenario

        extra_fields = [
            "session_id",
            "scenario",
            "provider",
            "model",
            "duration_ms",
            "error",
            "error_code",
            "tokens_in",
            "tokens_out",
            "operation",
            "phase",
            "message_count",
            "analysis_count",
            "status",
            "metadata",
        ]
        for field in extra_fields:
            if hasattr(record, field) and getattr(record, field) is not None:
                log_data[field] = getattr(record, field)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class NamespaceFilter(logging.Filter):
    """Filter that enables debug logging for specific namespaces."""

    def __init__(self, debug_namespaces: list[str], min_level: int = logging.INFO):
        super().__init__()
        self.debug_namespaces = set(debug_namespaces)
        self.min_level = min_level

    def filter(self, record: logging.LogRecord) -> bool:
        """Allow logs at min_level and above, but DEBUG only for enabled namespaces."""
        if record.levelno >= self.min_level:
            return True
        namespace = record.name.split(".")[0]
        return namespace in self.debug_namespaces


def setup_logging(log_level: str = "INFO", debug_namespaces: list[str] | None = None) -> None:
    """Configure structured logging for the engine.

    Args:
        log_level: Default log level (DEBUG, INFO, WARNING, ERROR)
        debug_namespaces: List of namespaces to enable DEBUG logging for
    """

    debug_namespaces = debug_namespaces or []

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter())
    handler.addFilter(NamespaceFilter(debug_namespaces, logging.getLevelName(log_level)))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG)  # Let filter handle level

    for noisy_logger in ["asyncio", "httpx", "httpcore"]:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)

    logger = logging.getLogger("logging")
    logger.info(
        "Logging configured",
        extra={
            "service": "logging",
            "metadata": {"log_level": log_level, "debug_namespaces": debug_namespaces},
        },
    )


def set_conversation_context(
    session_id: str | None = None,
    scenario: str | None = None,
) -> None:
    """Set context variables for conversation tracing."""

    if session_id is not None:
        session_id_var.set(session_id)
    if scenario is not None:
        scenario_var.set(scenario)


def clear_conversation_context() -> None:
    """Clear all conversation context variables."""

    session_id_var.set(None)
    scenario_var.set(None)


__all__ = [
    "StructuredFormatter",
    "NamespaceFilter",
    "setup_logging",
    "set_conversation_context",
    "clear_conversation_context",
    "session_id_var",
    "scenario_var",
]
