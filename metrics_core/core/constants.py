"""
Metrics core constants.

Identifier grammar, reserved names and defaults shared by the data model,
the registry and the exposition renderer.
"""

import math
import re
from enum import Enum
from typing import Final

__all__ = [
    "MetricKind",
    "METRIC_NAME_RE",
    "LABEL_NAME_RE",
    "RESERVED_LABEL_NAMES",
    "BUCKET_LABEL",
    "DEFAULT_BUCKETS",
    "INF",
    "CONTENT_TYPE_LATEST",
    "HISTOGRAM_SUFFIXES",
]


class MetricKind(str, Enum):
    """Prometheus metric types supported by this library."""

    COUNTER = "counter"
    GAUGE = "gauge"
    HISTOGRAM = "histogram"


# Prometheus data model: https://prometheus.io/docs/concepts/data_model/
METRIC_NAME_RE: Final = re.compile(r"^[a-zA-Z_:][a-zA-Z0-9_:]*$")
LABEL_NAME_RE: Final = re.compile(r"^[a-zA-Z_:][a-zA-Z0-9_:]*$")

# Histogram bucket boundary label, appended by the renderer
BUCKET_LABEL: Final = "le"
RESERVED_LABEL_NAMES: Final = frozenset({BUCKET_LABEL})

INF: Final = math.inf

# Sub-second latency ladder, 5ms to 10s in roughly exponential steps
DEFAULT_BUCKETS: Final = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)

CONTENT_TYPE_LATEST: Final = "text/plain; version=0.0.4; charset=utf-8"

HISTOGRAM_SUFFIXES: Final = ("_bucket", "_sum", "_count")
