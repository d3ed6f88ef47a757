"""
Core module: constants, exceptions, validators.
"""

from metrics_core.core.constants import (
    CONTENT_TYPE_LATEST,
    DEFAULT_BUCKETS,
    MetricKind,
)
from metrics_core.core.exceptions import (
    DuplicateName,
    InvalidName,
    InvalidValue,
    LabelCardinalityMismatch,
    MetricsError,
    UnknownCollector,
)

__all__ = [
    # constants
    "CONTENT_TYPE_LATEST",
    "DEFAULT_BUCKETS",
    "MetricKind",
    # exceptions
    "MetricsError",
    "InvalidName",
    "InvalidValue",
    "LabelCardinalityMismatch",
    "DuplicateName",
    "UnknownCollector",
]
