"""
Metric data model: label sets, children, families, registry and snapshots.
"""

from metrics_core.metrics.buckets import exponential_buckets, linear_buckets
from metrics_core.metrics.children import CounterChild, GaugeChild, HistogramChild
from metrics_core.metrics.families import Counter, Gauge, Histogram, MetricFamily
from metrics_core.metrics.labels import LabelSet
from metrics_core.metrics.registry import (
    CollectorRegistry,
    get_default_registry,
    reset_default_registry,
)
from metrics_core.metrics.snapshot import (
    FamilySnapshot,
    HistogramState,
    RegistrySnapshot,
    Sample,
    SeriesSnapshot,
)
from metrics_core.metrics.timing import Timer

__all__ = [
    # Families
    "MetricFamily",
    "Counter",
    "Gauge",
    "Histogram",
    # Children
    "CounterChild",
    "GaugeChild",
    "HistogramChild",
    "LabelSet",
    # Registry
    "CollectorRegistry",
    "get_default_registry",
    "reset_default_registry",
    # Snapshots
    "FamilySnapshot",
    "HistogramState",
    "RegistrySnapshot",
    "Sample",
    "SeriesSnapshot",
    # Helpers
    "Timer",
    "linear_buckets",
    "exponential_buckets",
]
