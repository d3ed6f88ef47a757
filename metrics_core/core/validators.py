"""
Shared validators for metric declarations and updates.
"""

import math
from numbers import Real
from typing import Iterable, Sequence

from metrics_core.core.constants import (
    LABEL_NAME_RE,
    METRIC_NAME_RE,
    RESERVED_LABEL_NAMES,
)
from metrics_core.core.exceptions import InvalidName, InvalidValue


def build_metric_name(name: str, namespace: str = "", subsystem: str = "") -> str:
    """
    Join namespace, subsystem and name with underscores, skipping empty parts.

    Example:
        build_metric_name("requests_total", "shop", "http") -> "shop_http_requests_total"
    """
    return "_".join(part for part in (namespace, subsystem, name) if part)


def validate_metric_name(name: str) -> str:
    """Validate a metric name against the Prometheus identifier grammar."""
    if not isinstance(name, str) or not METRIC_NAME_RE.fullmatch(name):
        raise InvalidName(str(name), kind="metric")
    return name


def validate_label_names(label_names: Iterable[str], reserved: frozenset[str] = RESERVED_LABEL_NAMES) -> tuple[str, ...]:
    """
    Validate an ordered sequence of label names.

    Rejects malformed names, reserved names, names starting with "__"
    (reserved for Prometheus internal use) and duplicates.
    """
    if isinstance(label_names, str):
        # A bare string would otherwise be split into single characters
        raise InvalidName(label_names, kind="label", reason="label names must be a sequence, not a string")

    names = tuple(label_names)
    seen: set[str] = set()
    for label in names:
        if not isinstance(label, str) or not LABEL_NAME_RE.fullmatch(label):
            raise InvalidName(str(label), kind="label")
        if label in reserved:
            raise InvalidName(label, kind="label", reason="reserved")
        if label.startswith("__"):
            raise InvalidName(label, kind="label", reason="names starting with '__' are reserved")
        if label in seen:
            raise InvalidName(label, kind="label", reason="duplicate")
        seen.add(label)
    return names


def coerce_number(value: object, what: str = "value") -> float:
    """Convert a real number to float; bools and non-numerics are rejected."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidValue(f"{what} must be a real number, got {type(value).__name__}", value=value)
    return float(value)


def validate_buckets(buckets: Sequence[float]) -> tuple[float, ...]:
    """
    Validate explicit histogram bucket upper bounds.

    Bounds must be finite numbers in strictly increasing order. The +Inf
    bucket is implicit and must not be supplied.
    """
    if isinstance(buckets, (str, bytes)):
        raise InvalidValue("Buckets must be a sequence of numbers", value=buckets)

    bounds = tuple(coerce_number(bound, "bucket bound") for bound in buckets)
    if not bounds:
        raise InvalidValue("Histogram requires at least one finite bucket", value=list(bounds))

    for bound in bounds:
        if math.isnan(bound):
            raise InvalidValue("Bucket bounds must not be NaN", value=list(bounds))
        if math.isinf(bound):
            raise InvalidValue("Infinite bucket bounds are implicit and must not be supplied", value=list(bounds))

    for lower, upper in zip(bounds, bounds[1:]):
        if upper <= lower:
            raise InvalidValue("Bucket bounds must be strictly increasing", value=list(bounds))

    return bounds
