"""
Centralized exceptions for the metrics library.

Every error is a programmer or configuration mistake surfaced synchronously
at the offending call (construction, registration or labelling). Errors are
logged once when raised and never retried.

Usage:
    from metrics_core.core.exceptions import InvalidName, InvalidValue

    raise InvalidName("http requests", kind="metric")
    raise InvalidValue("Counter increment must be non-negative", value=-1)
"""

from typing import Any

from metrics_core.config.logging import get_logger

logger = get_logger(__name__)


class MetricsError(Exception):
    """
    Base exception with automatic logging.

    All library errors inherit from this class so callers can catch the
    whole family with a single except clause.
    """

    log_level: str = "warning"

    def __init__(self, detail: str, **log_context: Any):
        log_fn = getattr(logger, self.log_level, logger.warning)
        log_fn(detail, error=type(self).__name__, **log_context)

        self.detail = detail
        self.context = log_context
        super().__init__(detail)


# =============================================================================
# Declaration errors
# =============================================================================


class InvalidName(MetricsError, ValueError):
    """
    Metric or label name fails the identifier grammar, or a label name
    collides with a reserved name such as "le".

    Usage:
        raise InvalidName("9lives", kind="metric")
        raise InvalidName("le", kind="label", reason="reserved")
    """

    def __init__(self, name: str, kind: str = "metric", reason: str | None = None, **log_context: Any):
        detail = f"Invalid {kind} name {name!r}"
        if reason:
            detail = f"{detail}: {reason}"
        self.name = name
        super().__init__(detail, name=name, kind=kind, **log_context)


class InvalidValue(MetricsError, ValueError):
    """Counter given a negative increment, non-numeric observation, bad buckets."""

    def __init__(self, detail: str, value: Any = None, **log_context: Any):
        self.value = value
        super().__init__(detail, value=value, **log_context)


# =============================================================================
# Labelling errors
# =============================================================================


class LabelCardinalityMismatch(MetricsError, ValueError):
    """
    Caller supplied label values that do not match the declared label names.

    Usage:
        raise LabelCardinalityMismatch("jobs_total", expected=("queue",), got=2)
    """

    def __init__(self, metric: str, expected: tuple[str, ...], got: Any, **log_context: Any):
        detail = (
            f"Metric {metric!r} expects {len(expected)} label value(s) "
            f"for {list(expected)}, got {got}"
        )
        self.metric = metric
        self.expected = expected
        super().__init__(detail, metric=metric, expected=list(expected), got=got, **log_context)


# =============================================================================
# Registry errors
# =============================================================================


class DuplicateName(MetricsError, ValueError):
    """Registry already holds a family with the same name but a different shape."""

    def __init__(self, name: str, reason: str = "already registered with a different shape", **log_context: Any):
        detail = f"Metric {name!r} {reason}"
        self.name = name
        super().__init__(detail, metric=name, **log_context)


class UnknownCollector(MetricsError, KeyError):
    """A lookup or unregister references a family the registry does not hold."""

    log_level = "info"

    def __init__(self, name: str, **log_context: Any):
        detail = f"Metric {name!r} is not registered"
        self.name = name
        super().__init__(detail, metric=name, **log_context)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.detail
