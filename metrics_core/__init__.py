"""
metrics_core: in-process Prometheus instrumentation.

Declare counters, gauges and histograms, update them from any thread, and
render a registry snapshot in the Prometheus text exposition format.

Usage:
    from metrics_core import Counter, CollectorRegistry, generate_latest

    registry = CollectorRegistry()
    requests = Counter("http_requests_total", "Total requests").register(registry)
    requests.inc()
    body = generate_latest(registry)
"""

from metrics_core.core import (
    CONTENT_TYPE_LATEST,
    DEFAULT_BUCKETS,
    DuplicateName,
    InvalidName,
    InvalidValue,
    LabelCardinalityMismatch,
    MetricKind,
    MetricsError,
    UnknownCollector,
)
from metrics_core.metrics import (
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    MetricFamily,
    exponential_buckets,
    get_default_registry,
    linear_buckets,
    reset_default_registry,
)
from metrics_core.exposition import (
    generate_latest,
    make_metrics_router,
    parse_text,
    render,
    render_bytes,
)

__all__ = [
    # Families
    "MetricFamily",
    "Counter",
    "Gauge",
    "Histogram",
    "MetricKind",
    "linear_buckets",
    "exponential_buckets",
    "DEFAULT_BUCKETS",
    # Registry
    "CollectorRegistry",
    "get_default_registry",
    "reset_default_registry",
    # Exposition
    "CONTENT_TYPE_LATEST",
    "render",
    "render_bytes",
    "generate_latest",
    "parse_text",
    "make_metrics_router",
    # Errors
    "MetricsError",
    "InvalidName",
    "InvalidValue",
    "LabelCardinalityMismatch",
    "DuplicateName",
    "UnknownCollector",
]
