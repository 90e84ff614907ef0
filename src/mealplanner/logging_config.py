"""Structured logging configuration for the meal planner."""

import json
import logging
import sys
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from typing import Any

# Context attached to every record logged while a request or a list
# generation is in progress
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
household_id_ctx: ContextVar[str | None] = ContextVar("household_id", default=None)
week_start_ctx: ContextVar[str | None] = ContextVar("week_start", default=None)

_CONTEXT_VARS: dict[str, ContextVar[str | None]] = {
    "request_id": request_id_ctx,
    "household_id": household_id_ctx,
    "week_start": week_start_ctx,
}

# Short labels used by the text formatter
_TEXT_LABELS = {"request_id": "req", "household_id": "household", "week_start": "week"}

_QUIET_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "uvicorn.access")


def current_context() -> dict[str, str]:
    """Context values that are currently set."""
    return {name: value for name, var in _CONTEXT_VARS.items() if (value := var.get())}


class StructuredJsonFormatter(logging.Formatter):
    """One JSON object per line, for log shipping in production."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **current_context(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["location"] = f"{record.filename}:{record.lineno}"
        return json.dumps(log_data)


class ContextualFormatter(logging.Formatter):
    """Human-readable formatter for development."""

    def format(self, record: logging.LogRecord) -> str:
        context = current_context()
        if "request_id" in context:
            context["request_id"] = context["request_id"][:8]

        context_str = ""
        if context:
            parts = ", ".join(f"{_TEXT_LABELS[k]}={v}" for k, v in context.items())
            context_str = f" [{parts}]"

        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        formatted = (
            f"{timestamp} | {record.levelname.ljust(8)} | {record.name}{context_str} | "
            f"{record.getMessage()}"
        )

        if record.exc_info:
            formatted += "\n" + self.formatException(record.exc_info)

        return formatted


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that copies the current context into each record's extra."""

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        kwargs["extra"] = {**kwargs.get("extra", {}), **current_context()}
        return msg, kwargs


def get_logger(name: str) -> ContextLogger:
    """Get a context-aware logger for the given module name."""
    return ContextLogger(logging.getLogger(name), {})


def configure_logging(log_level: str = "INFO", json_format: bool = False) -> None:
    """
    Route all logging to stdout through one formatter.

    Args:
        log_level: Minimum level for the application's own loggers.
        json_format: Emit JSON lines instead of human-readable text.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredJsonFormatter() if json_format else ContextualFormatter())

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    logging.getLogger("mealplanner").setLevel(level)
    for noisy in _QUIET_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    get_logger(__name__).debug(
        f"Logging configured: level={log_level.upper()}, format={'json' if json_format else 'text'}"
    )


class LoggingContext:
    """
    Set context values for the duration of a with block.

    Values left as None are not touched, so contexts nest: a grocery list
    generation inside a request keeps the request id.
    """

    def __init__(
        self,
        request_id: str | None = None,
        household_id: str | None = None,
        week_start: str | None = None,
    ):
        self.values = {
            "request_id": request_id,
            "household_id": household_id,
            "week_start": week_start,
        }
        self._tokens: dict[str, Token] = {}

    def __enter__(self) -> "LoggingContext":
        for name, value in self.values.items():
            if value is not None:
                self._tokens[name] = _CONTEXT_VARS[name].set(value)
        return self

    def __exit__(self, *args: Any) -> None:
        for name, token in self._tokens.items():
            _CONTEXT_VARS[name].reset(token)
        self._tokens.clear()
