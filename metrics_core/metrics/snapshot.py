"""
Immutable point-in-time views produced by Registry.collect().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterator

from metrics_core.core.constants import BUCKET_LABEL, MetricKind
from metrics_core.metrics.labels import LabelSet


@dataclass(frozen=True)
class Sample:
    """One rendered line: sample name, ordered label pairs, value."""

    name: str
    labels: tuple[tuple[str, str], ...]
    value: float

    def label_dict(self) -> dict[str, str]:
        return dict(self.labels)


@dataclass(frozen=True)
class HistogramState:
    """
    Consistent histogram state for one child.

    ``bucket_counts[i]`` is the number of observations <= ``upper_bounds[i]``;
    the last bound is +Inf and its count equals ``count``.
    """

    upper_bounds: tuple[float, ...]
    bucket_counts: tuple[int, ...]
    sum: float
    count: int

    def buckets(self) -> Iterator[tuple[float, int]]:
        return zip(self.upper_bounds, self.bucket_counts)


@dataclass(frozen=True)
class SeriesSnapshot:
    """State of one child: a scalar value, or a histogram state."""

    labels: LabelSet
    value: float | None = None
    histogram: HistogramState | None = None


@dataclass(frozen=True)
class FamilySnapshot:
    """Family metadata plus the state of every child at traversal time."""

    name: str
    help: str
    kind: MetricKind
    label_names: tuple[str, ...]
    series: tuple[SeriesSnapshot, ...] = field(default_factory=tuple)

    def samples(self, format_bound: Callable[[float], str] | None = None) -> Iterator[Sample]:
        """
        Expand series into rendered samples.

        ``format_bound`` turns a bucket bound into its ``le`` label value;
        it defaults to the exposition number format.
        """
        if format_bound is None:
            # Import here to avoid circular imports
            from metrics_core.exposition.formatter import format_value

            format_bound = format_value

        for series in self.series:
            pairs = tuple(series.labels.items())
            if self.kind is MetricKind.HISTOGRAM:
                state = series.histogram
                for bound, count in state.buckets():
                    yield Sample(
                        f"{self.name}_bucket",
                        pairs + ((BUCKET_LABEL, format_bound(bound)),),
                        float(count),
                    )
                yield Sample(f"{self.name}_sum", pairs, state.sum)
                yield Sample(f"{self.name}_count", pairs, float(state.count))
            else:
                yield Sample(self.name, pairs, series.value)


@dataclass(frozen=True)
class RegistrySnapshot:
    """Ordered family snapshots from one collection pass."""

    families: tuple[FamilySnapshot, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[FamilySnapshot]:
        return iter(self.families)

    def __len__(self) -> int:
        return len(self.families)

    def samples(self) -> Iterator[Sample]:
        for family in self.families:
            yield from family.samples()
