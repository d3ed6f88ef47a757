"""
Structured logging for the metrics library.
Uses Python's standard logging with JSON formatting for production.

The library never touches the root logger: setup_logging() only configures
the "metrics_core" logger tree so host applications keep their own setup.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from metrics_core.config.settings import settings

LIBRARY_LOGGER = "metrics_core"

# Context keys every library record may carry; formatters promote them
PROMOTED_FIELDS = ("metric", "error")


def _split_context(record: logging.LogRecord) -> tuple[dict[str, Any], dict[str, Any]]:
    """Separate promoted fields from the rest of a record's keyword context."""
    context = dict(getattr(record, "extra_data", None) or {})
    promoted = {key: context.pop(key) for key in PROMOTED_FIELDS if key in context}
    return promoted, context


def _format_context_value(value: Any) -> str:
    if isinstance(value, tuple):
        return ",".join(str(item) for item in value)
    return str(value)


class StructuredFormatter(logging.Formatter):
    """
    One JSON object per record.

    ``metric`` (family name) and ``error`` (exception class) are top-level
    keys; remaining keyword context goes under ``data``.
    """

    def format(self, record: logging.LogRecord) -> str:
        promoted, context = _split_context(record)
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **promoted,
        }

        if context:
            log_data["data"] = context

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if settings.debug:
            log_data["source"] = f"{record.filename}:{record.lineno}"

        return json.dumps(log_data, default=str)


class DevelopmentFormatter(logging.Formatter):
    """
    Colored single-line output, e.g.::

        [12:00:01] WARNING  metrics_core.core.exceptions: [DuplicateName] jobs_total: Metric 'jobs_total' already registered with a different shape
    """

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        promoted, context = _split_context(record)
        color = self.COLORS.get(record.levelname, self.RESET)
        timestamp = datetime.now().strftime("%H:%M:%S")

        prefix = ""
        if "error" in promoted:
            prefix += f"[{promoted['error']}] "
        if "metric" in promoted:
            prefix += f"{promoted['metric']}: "

        message = f"{color}[{timestamp}] {record.levelname:8}{self.RESET} {record.name}: {prefix}{record.getMessage()}"

        if context:
            data_str = " ".join(f"{k}={_format_context_value(v)}" for k, v in context.items())
            message += f" ({data_str})"

        if record.exc_info:
            message += f"\n{self.formatException(record.exc_info)}"

        return message


class StructuredLogger(logging.Logger):
    """
    Logger that accepts keyword context.

    Usage:
        logger.info("Family registered", metric="http_requests_total")
    """

    def _log_with_data(
        self,
        level: int,
        msg: str,
        args: tuple,
        exc_info: Any = None,
        extra: dict | None = None,
        **kwargs: Any,
    ) -> None:
        if not self.isEnabledFor(level):
            return
        if extra is None:
            extra = {}
        extra["extra_data"] = kwargs if kwargs else None
        super()._log(level, msg, args, exc_info=exc_info, extra=extra)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log_with_data(logging.DEBUG, msg, args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log_with_data(logging.INFO, msg, args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log_with_data(logging.WARNING, msg, args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        exc_info = kwargs.pop("exc_info", None)
        self._log_with_data(logging.ERROR, msg, args, exc_info=exc_info, **kwargs)

    def critical(self, msg: str, *args: Any, **kwargs: Any) -> None:
        exc_info = kwargs.pop("exc_info", None)
        self._log_with_data(logging.CRITICAL, msg, args, exc_info=exc_info, **kwargs)


def setup_logging(level: str | None = None) -> None:
    """
    Attach a handler to the library logger tree.
    Call this once at application startup if library logs are wanted on stdout.
    """
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    if settings.debug:
        log_level = logging.DEBUG

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)

    if settings.environment == "production":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(DevelopmentFormatter())

    library_logger = logging.getLogger(LIBRARY_LOGGER)
    library_logger.setLevel(log_level)
    library_logger.handlers.clear()
    library_logger.addHandler(handler)
    library_logger.propagate = False


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger.

    Usage:
        from metrics_core.config.logging import get_logger
        logger = get_logger(__name__)

        logger.debug("Child created", metric="jobs_total", labels=("a",))
    """
    manager = logging.Logger.manager
    previous = manager.loggerClass
    manager.setLoggerClass(StructuredLogger)
    try:
        return logging.getLogger(name)  # type: ignore[return-value]
    finally:
        manager.loggerClass = previous
