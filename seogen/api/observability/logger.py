"""Structured logging for request observability.

Provides context-aware logging with automatic request/user/mode tagging.
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime
from typing import Any

# Context variables for automatic tagging
_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_user_id: ContextVar[str | None] = ContextVar("user_id", default=None)
_mode: ContextVar[str | None] = ContextVar("mode", default=None)


def set_context(
    request_id: str | None = None,
    user_id: str | None = None,
    mode: str | None = None,
) -> None:
    """Set logging context variables."""
    if request_id is not None:
        _request_id.set(request_id)
    if user_id is not None:
        _user_id.set(user_id)
    if mode is not None:
        _mode.set(mode)


def clear_context() -> None:
    """Clear all logging context variables."""
    _request_id.set(None)
    _user_id.set(None)
    _mode.set(None)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.now().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if request_id := _request_id.get():
            log_data["request_id"] = request_id
        if user_id := _user_id.get():
            log_data["user_id"] = user_id
        if mode := _mode.get():
            log_data["mode"] = mode

        if hasattr(record, "extra_data"):
            log_data["data"] = record.extra_data

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


def configure_logging(level: str = "INFO", fmt: str = "text") -> None:
    """Configure the root logger for the process.

    ``fmt="json"`` installs StructuredFormatter on stdout; anything else keeps
    the plain basicConfig line format.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    if fmt == "json":
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        logging.basicConfig(level=log_level, handlers=[handler], force=True)
    else:
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )


class StructuredLogger:
    """Logger with structured payloads and context awareness."""

    def __init__(self, name: str):
        self._logger = logging.getLogger(name)

    def _log(
        self,
        level: int,
        msg: str,
        *args: Any,
        extra_data: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        extra = kwargs.pop("extra", {})
        if extra_data:
            extra["extra_data"] = extra_data
        self._logger.log(level, msg, *args, extra=extra, **kwargs)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, *args, **kwargs)

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log exception with traceback."""
        self._log(logging.ERROR, msg, *args, exc_info=True, **kwargs)

    def state_changed(self, previous: str, current: str, **extra: Any) -> None:
        """Log a request lifecycle transition."""
        self.debug(
            f"Request state {previous} -> {current}",
            extra_data={"from": previous, "to": current, **extra},
        )

    def llm_request(
        self,
        provider: str,
        model: str,
        tokens_in: int | None = None,
        **extra: Any,
    ) -> None:
        """Log gateway request."""
        self.info(
            f"LLM request to {provider}/{model}",
            extra_data={
                "provider": provider,
                "model": model,
                "tokens_in": tokens_in,
                **extra,
            },
        )

    def llm_response(
        self,
        provider: str,
        model: str,
        tokens_out: int | None = None,
        latency_ms: int | None = None,
        cost_usd: float | None = None,
        **extra: Any,
    ) -> None:
        """Log gateway response with the estimated cost."""
        self.info(
            f"LLM response from {provider}/{model}",
            extra_data={
                "provider": provider,
                "model": model,
                "tokens_out": tokens_out,
                "latency_ms": latency_ms,
                "cost_usd": cost_usd,
                **extra,
            },
        )


# Global logger cache
_loggers: dict[str, StructuredLogger] = {}


def get_logger(name: str) -> StructuredLogger:
    """Get or create a structured logger.

    Args:
        name: Logger name

    Returns:
        StructuredLogger instance
    """
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name)
    return _loggers[name]
