"""
Metric families: Counter, Gauge and Histogram collectors.

A family owns its declared name, help text and label-name schema, plus the
children keyed by label values. Children are created on first use under the
family lock, so at most one child ever exists per distinct label combination.

Usage:
    requests = Counter("http_requests_total", "Total requests", ["method"])
    requests.register()
    requests.labels("GET").inc()

    latency = Histogram("http_request_duration_seconds", "Latency").register(registry)
    with latency.time():
        handle()
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any, Callable, Generic, Iterable, Sequence, TypeVar

from metrics_core.config.logging import get_logger
from metrics_core.config.settings import settings
from metrics_core.core.constants import HISTOGRAM_SUFFIXES, MetricKind
from metrics_core.core.exceptions import LabelCardinalityMismatch
from metrics_core.core.validators import (
    build_metric_name,
    validate_buckets,
    validate_label_names,
    validate_metric_name,
)
from metrics_core.metrics.children import CounterChild, GaugeChild, HistogramChild, MetricChild
from metrics_core.metrics.labels import EMPTY_LABEL_SET, LabelSet
from metrics_core.metrics.snapshot import FamilySnapshot, HistogramState
from metrics_core.metrics.timing import ExceptionCounter, InProgress, Timer

if TYPE_CHECKING:
    from metrics_core.metrics.registry import CollectorRegistry

logger = get_logger(__name__)

ChildT = TypeVar("ChildT", bound=MetricChild)


class MetricFamily(Generic[ChildT]):
    """
    Base collector shared by all metric kinds.

    Subclasses set ``kind`` and implement ``_new_child``.
    """

    kind: MetricKind

    def __init__(
        self,
        name: str,
        documentation: str,
        labelnames: Iterable[str] = (),
        namespace: str = "",
        subsystem: str = "",
    ):
        self._name = validate_metric_name(build_metric_name(name, namespace, subsystem))
        self._documentation = str(documentation)
        self._labelnames = validate_label_names(labelnames)

        self._lock = threading.Lock()
        self._children: dict[tuple[str, ...], ChildT] = {}

        # Unlabeled families have exactly one child, created up front
        self._unlabeled: ChildT | None = None
        if not self._labelnames:
            self._unlabeled = self._new_child(EMPTY_LABEL_SET)
            self._children[EMPTY_LABEL_SET.key] = self._unlabeled

    # -------------------------------------------------------------------------
    # Metadata
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def documentation(self) -> str:
        return self._documentation

    @property
    def labelnames(self) -> tuple[str, ...]:
        return self._labelnames

    def shape(self) -> tuple:
        """Everything that must match for two declarations to share a name."""
        return (self.kind, self._documentation, self._labelnames)

    def sample_names(self) -> tuple[str, ...]:
        """Names of the series lines this family renders."""
        return (self._name,)

    # -------------------------------------------------------------------------
    # Children
    # -------------------------------------------------------------------------

    def _new_child(self, labels: LabelSet) -> ChildT:
        raise NotImplementedError

    def labels(self, *labelvalues: Any, **labelkwargs: Any) -> ChildT:
        """
        Return the child for a label combination, creating it on first use.

        Accepts positional values in declared order, a single list/tuple of
        values, or keyword values by label name. On a family without label
        names, a call with no values returns the single unlabeled child.
        """
        label_set = LabelSet.from_call(self._name, self._labelnames, labelvalues, labelkwargs)
        if not self._labelnames:
            return self._unlabeled

        with self._lock:
            child = self._children.get(label_set.key)
            if child is None:
                child = self._new_child(label_set)
                self._children[label_set.key] = child
                logger.debug("Child created", metric=self._name, labels=label_set.values)
        return child

    def _single(self) -> ChildT:
        if self._unlabeled is None:
            raise LabelCardinalityMismatch(self._name, self._labelnames, got="no label values")
        return self._unlabeled

    def children(self) -> list[ChildT]:
        """Current children sorted by label values."""
        with self._lock:
            items = sorted(self._children.items())
        return [child for _, child in items]

    def collect(self) -> FamilySnapshot:
        """Point-in-time view of this family and all of its children."""
        return FamilySnapshot(
            name=self._name,
            help=self._documentation,
            kind=self.kind,
            label_names=self._labelnames,
            series=tuple(child.snapshot() for child in self.children()),
        )

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def register(self, registry: CollectorRegistry | None = None) -> MetricFamily:
        """
        Register with ``registry`` (the default registry when omitted).

        Returns the registered family: this one, or an identical-shape family
        already registered under the same name.
        """
        if registry is None:
            # Import here to avoid circular imports
            from metrics_core.metrics.registry import get_default_registry

            registry = get_default_registry()
        return registry.register(self)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._name} labels={list(self._labelnames)}>"


# =============================================================================
# Counter
# =============================================================================


class Counter(MetricFamily[CounterChild]):
    """Monotonically increasing counter."""

    kind = MetricKind.COUNTER

    def _new_child(self, labels: LabelSet) -> CounterChild:
        return CounterChild(self._name, labels)

    def inc(self, amount: float = 1) -> None:
        self._single().inc(amount)

    def get(self) -> float:
        return self._single().get()

    def count_exceptions(self, exc_type: type[BaseException] | tuple[type[BaseException], ...] = Exception) -> ExceptionCounter:
        return self._single().count_exceptions(exc_type)


# =============================================================================
# Gauge
# =============================================================================


class Gauge(MetricFamily[GaugeChild]):
    """Value that can go up and down."""

    kind = MetricKind.GAUGE

    def _new_child(self, labels: LabelSet) -> GaugeChild:
        return GaugeChild(self._name, labels)

    def inc(self, amount: float = 1) -> None:
        self._single().inc(amount)

    def dec(self, amount: float = 1) -> None:
        self._single().dec(amount)

    def set(self, value: float) -> None:
        self._single().set(value)

    def set_to_current_time(self) -> None:
        self._single().set_to_current_time()

    def get(self) -> float:
        return self._single().get()

    def track_duration(self, work: Callable[[], Any]) -> Any:
        return self._single().track_duration(work)

    def time(self) -> Timer:
        return self._single().time()

    def track_inprogress(self) -> InProgress:
        return self._single().track_inprogress()


# =============================================================================
# Histogram
# =============================================================================


class Histogram(MetricFamily[HistogramChild]):
    """
    Distribution of observations in cumulative buckets.

    ``buckets`` are finite, strictly increasing upper bounds; the +Inf bucket
    is always appended. Omitted buckets default to ``settings.default_buckets``.
    """

    kind = MetricKind.HISTOGRAM

    def __init__(
        self,
        name: str,
        documentation: str,
        labelnames: Iterable[str] = (),
        namespace: str = "",
        subsystem: str = "",
        buckets: Sequence[float] | None = None,
    ):
        self._upper_bounds = validate_buckets(settings.default_buckets if buckets is None else buckets)
        super().__init__(name, documentation, labelnames, namespace, subsystem)

    @property
    def buckets(self) -> tuple[float, ...]:
        """Finite upper bounds, without the implicit +Inf."""
        return self._upper_bounds

    def shape(self) -> tuple:
        return super().shape() + (self._upper_bounds,)

    def sample_names(self) -> tuple[str, ...]:
        return tuple(f"{self._name}{suffix}" for suffix in HISTOGRAM_SUFFIXES)

    def _new_child(self, labels: LabelSet) -> HistogramChild:
        return HistogramChild(self._name, labels, self._upper_bounds)

    def observe(self, value: float) -> None:
        self._single().observe(value)

    def track(self, work: Callable[[], Any]) -> Any:
        return self._single().track(work)

    def time(self) -> Timer:
        return self._single().time()

    def get(self) -> HistogramState:
        return self._single().get()
