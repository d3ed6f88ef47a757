"""
Property-based tests with Hypothesis.
"""

import math

import pytest
from hypothesis import HealthCheck, given, settings, strategies as st

from metrics_core import CollectorRegistry, Counter, Gauge, Histogram, InvalidValue, parse_text, render

finite_floats = st.floats(allow_nan=False, allow_infinity=False, min_value=-1e9, max_value=1e9)
label_values = st.text(max_size=20)


class TestCounterProperties:
    """Counter accumulation."""

    @given(amount=st.integers(min_value=0, max_value=10_000), times=st.integers(min_value=0, max_value=50))
    @settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_inc_n_k_times_equals_n_times_k(self, amount, times):
        counter = Counter("c_total", "c")
        for _ in range(times):
            counter.inc(amount)
        assert counter.get() == amount * times

    @given(amount=st.floats(max_value=-1e-9, allow_nan=False))
    @settings(max_examples=25, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_negative_inc_never_changes_value(self, amount):
        counter = Counter("c_total", "c")
        counter.inc(5)
        with pytest.raises(InvalidValue):
            counter.inc(amount)
        assert counter.get() == 5


class TestGaugeProperties:
    """Gauge result equals the algebraic effect of operations in order."""

    @given(
        ops=st.lists(
            st.tuples(st.sampled_from(["inc", "dec", "set"]), st.integers(min_value=-1000, max_value=1000)),
            max_size=40,
        )
    )
    @settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_ops_apply_in_call_order(self, ops):
        gauge = Gauge("g", "g")
        expected = 0
        for op, value in ops:
            getattr(gauge, op)(value)
            if op == "inc":
                expected += value
            elif op == "dec":
                expected -= value
            else:
                expected = value
        assert gauge.get() == expected


class TestHistogramProperties:
    """Cumulative bucket invariants."""

    @given(values=st.lists(finite_floats, max_size=60))
    @settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_buckets_monotonic_and_inf_is_count(self, values):
        histogram = Histogram("h", "h", buckets=[-1, 0, 0.5, 10, 1000])
        for value in values:
            histogram.observe(value)

        state = histogram.get()
        counts = state.bucket_counts
        assert all(b >= a for a, b in zip(counts, counts[1:]))
        assert counts[-1] == state.count == len(values)
        for bound, count in state.buckets():
            assert count == sum(1 for v in values if v <= bound)


class TestRoundTripProperties:
    """Rendered text parses back to the snapshot's samples."""

    @given(
        series=st.dictionaries(
            st.tuples(label_values, label_values),
            st.floats(allow_nan=False, allow_infinity=True),
            max_size=10,
        )
    )
    @settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_render_parse_round_trip(self, series):
        registry = CollectorRegistry()
        gauge = Gauge("g", "help with \\ and\nnewline", ["a", "b"]).register(registry)
        for (a, b), value in series.items():
            gauge.labels(a, b).set(value)

        snapshot = registry.collect()
        expected = [(s.name, s.labels, s.value) for s in snapshot.samples()]
        parsed = [(s.name, s.labels, s.value) for f in parse_text(render(snapshot)) for s in f.samples]

        assert parsed == expected
        assert not any(math.isnan(value) for _, _, value in parsed)
