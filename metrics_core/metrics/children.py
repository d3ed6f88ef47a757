"""
Metric children: the mutable numeric state of one time series.

Each child guards its fields with its own threading.Lock so every update is
linearizable and a snapshot never observes a half-applied update. Children
are created and owned by their family; application code obtains them through
``family.labels(...)``.
"""

from __future__ import annotations

import math
import threading
import time
from bisect import bisect_left
from typing import Any, Callable

from metrics_core.core.exceptions import InvalidValue
from metrics_core.core.validators import coerce_number
from metrics_core.metrics.labels import LabelSet
from metrics_core.metrics.snapshot import HistogramState, SeriesSnapshot
from metrics_core.metrics.timing import ExceptionCounter, InProgress, Timer, track


class MetricChild:
    """Base class holding the label set and the per-series lock."""

    __slots__ = ("_metric", "_labels", "_lock")

    def __init__(self, metric: str, labels: LabelSet):
        self._metric = metric
        self._labels = labels
        self._lock = threading.Lock()

    @property
    def labels(self) -> LabelSet:
        return self._labels

    def snapshot(self) -> SeriesSnapshot:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._metric}{self._labels.as_dict()}>"


# =============================================================================
# Counter
# =============================================================================


class CounterChild(MetricChild):
    """Monotonically non-decreasing accumulator."""

    __slots__ = ("_value",)

    def __init__(self, metric: str, labels: LabelSet):
        super().__init__(metric, labels)
        self._value = 0.0

    def inc(self, amount: float = 1) -> None:
        """Add a non-negative amount. Negative or NaN amounts are rejected."""
        value = coerce_number(amount, "Counter increment")
        if value < 0 or math.isnan(value):
            raise InvalidValue("Counter increment must be a non-negative number", value=amount, metric=self._metric)
        with self._lock:
            self._value += value

    def get(self) -> float:
        with self._lock:
            return self._value

    def count_exceptions(self, exc_type: type[BaseException] | tuple[type[BaseException], ...] = Exception) -> ExceptionCounter:
        """Increment by one whenever the wrapped block raises ``exc_type``."""
        return ExceptionCounter(self.inc, exc_type)

    def snapshot(self) -> SeriesSnapshot:
        return SeriesSnapshot(labels=self._labels, value=self.get())


# =============================================================================
# Gauge
# =============================================================================


class GaugeChild(MetricChild):
    """Freely mutable accumulator."""

    __slots__ = ("_value",)

    def __init__(self, metric: str, labels: LabelSet):
        super().__init__(metric, labels)
        self._value = 0.0

    def inc(self, amount: float = 1) -> None:
        value = coerce_number(amount, "Gauge increment")
        with self._lock:
            self._value += value

    def dec(self, amount: float = 1) -> None:
        value = coerce_number(amount, "Gauge decrement")
        with self._lock:
            self._value -= value

    def set(self, value: float) -> None:
        new_value = coerce_number(value, "Gauge value")
        with self._lock:
            self._value = new_value

    def set_to_current_time(self) -> None:
        self.set(time.time())

    def get(self) -> float:
        with self._lock:
            return self._value

    def track_duration(self, work: Callable[[], Any]) -> Any:
        """
        Run ``work`` and set the gauge to its duration in seconds.

        The gauge is set exactly once, after the work completes or raises.
        The work's result is returned and its failure propagated.
        """
        return track(work, self.set)

    def time(self) -> Timer:
        """Timer setting the gauge to the elapsed seconds on exit."""
        return Timer(self.set)

    def track_inprogress(self) -> InProgress:
        """Increment on entry and decrement on exit."""
        return InProgress(self.inc, self.dec)

    def snapshot(self) -> SeriesSnapshot:
        return SeriesSnapshot(labels=self._labels, value=self.get())


# =============================================================================
# Histogram
# =============================================================================


class HistogramChild(MetricChild):
    """
    Cumulative bucket counters plus running sum and count.

    Internally each observation increments exactly one exclusive bucket slot
    (the first bound >= value, or the +Inf slot). Cumulative counts are
    produced at snapshot time under the same lock, so sum, count and every
    bucket always reflect the same set of observations.
    """

    __slots__ = ("_upper_bounds", "_slots", "_sum", "_count")

    def __init__(self, metric: str, labels: LabelSet, upper_bounds: tuple[float, ...]):
        super().__init__(metric, labels)
        # Finite bounds only; the +Inf slot is the extra last entry in _slots
        self._upper_bounds = upper_bounds
        self._slots = [0] * (len(upper_bounds) + 1)
        self._sum = 0.0
        self._count = 0

    @property
    def upper_bounds(self) -> tuple[float, ...]:
        return self._upper_bounds + (math.inf,)

    def observe(self, value: float) -> None:
        """
        Record one observation.

        NaN is accepted: it flows into sum and count and only the +Inf
        bucket counts it.
        """
        amount = coerce_number(value, "Histogram observation")
        if math.isnan(amount):
            index = len(self._upper_bounds)
        else:
            index = bisect_left(self._upper_bounds, amount)
        with self._lock:
            self._slots[index] += 1
            self._sum += amount
            self._count += 1

    def track(self, work: Callable[[], Any]) -> Any:
        """
        Run ``work`` and observe its duration in seconds.

        The observation happens exactly once, after the work completes or
        raises. The work's result is returned and its failure propagated.
        """
        return track(work, self.observe)

    def time(self) -> Timer:
        """Timer observing the elapsed seconds on exit."""
        return Timer(self.observe)

    def state(self) -> HistogramState:
        with self._lock:
            slots = list(self._slots)
            total = self._sum
            count = self._count

        cumulative = []
        running = 0
        for slot in slots:
            running += slot
            cumulative.append(running)

        return HistogramState(
            upper_bounds=self.upper_bounds,
            bucket_counts=tuple(cumulative),
            sum=total,
            count=count,
        )

    def get(self) -> HistogramState:
        return self.state()

    def snapshot(self) -> SeriesSnapshot:
        return SeriesSnapshot(labels=self._labels, histogram=self.state())
