"""
Tests for Counter and Gauge families and their children.
"""

import math
import time

import pytest

from metrics_core import Counter, Gauge, InvalidName, InvalidValue, LabelCardinalityMismatch


# =============================================================================
# Counter Tests
# =============================================================================


class TestCounter:
    """Tests for the monotonic counter."""

    def test_starts_at_zero(self):
        counter = Counter("jobs_total", "Jobs")
        assert counter.get() == 0.0

    def test_inc_default_is_one(self):
        counter = Counter("jobs_total", "Jobs")
        counter.inc()
        counter.inc()
        assert counter.get() == 2.0

    def test_inc_by_amount(self):
        counter = Counter("bytes_total", "Bytes")
        counter.inc(2.5)
        counter.inc(0)
        assert counter.get() == 2.5

    def test_negative_increment_rejected_and_value_unchanged(self):
        counter = Counter("jobs_total", "Jobs")
        counter.inc(3)

        with pytest.raises(InvalidValue):
            counter.inc(-1)

        assert counter.get() == 3.0

    def test_nan_increment_rejected(self):
        counter = Counter("jobs_total", "Jobs")
        with pytest.raises(InvalidValue):
            counter.inc(float("nan"))
        assert counter.get() == 0.0

    def test_non_numeric_increment_rejected(self):
        counter = Counter("jobs_total", "Jobs")
        with pytest.raises(InvalidValue):
            counter.inc("1")
        with pytest.raises(InvalidValue):
            counter.inc(True)

    def test_invalid_value_is_a_value_error(self):
        counter = Counter("jobs_total", "Jobs")
        with pytest.raises(ValueError):
            counter.inc(-5)

    def test_count_exceptions_counts_and_propagates(self):
        counter = Counter("failures_total", "Failures")

        with pytest.raises(KeyError):
            with counter.count_exceptions(KeyError):
                raise KeyError("boom")

        with counter.count_exceptions(KeyError):
            pass

        assert counter.get() == 1.0

    def test_count_exceptions_ignores_other_types(self):
        counter = Counter("failures_total", "Failures")

        with pytest.raises(RuntimeError):
            with counter.count_exceptions(KeyError):
                raise RuntimeError("not counted")

        assert counter.get() == 0.0

    def test_count_exceptions_as_decorator(self):
        counter = Counter("failures_total", "Failures")

        @counter.count_exceptions()
        def flaky():
            raise ValueError("nope")

        with pytest.raises(ValueError):
            flaky()
        assert counter.get() == 1.0


# =============================================================================
# Gauge Tests
# =============================================================================


class TestGauge:
    """Tests for the freely mutable gauge."""

    def test_inc_dec_set(self):
        gauge = Gauge("queue_depth", "Queue depth")
        gauge.inc()
        gauge.inc(4)
        gauge.dec(2)
        assert gauge.get() == 3.0

        gauge.set(-7.5)
        assert gauge.get() == -7.5

    def test_negative_inc_allowed(self):
        gauge = Gauge("temperature", "Temperature")
        gauge.inc(-3)
        gauge.dec(-1)
        assert gauge.get() == -2.0

    def test_set_accepts_special_values(self):
        gauge = Gauge("ratio", "Ratio")
        gauge.set(float("inf"))
        assert math.isinf(gauge.get())
        gauge.set(float("nan"))
        assert math.isnan(gauge.get())

    def test_set_to_current_time(self):
        gauge = Gauge("last_run_timestamp_seconds", "Last run")
        before = time.time()
        gauge.set_to_current_time()
        after = time.time()
        assert before <= gauge.get() <= after

    def test_track_duration_sets_elapsed_and_returns_result(self):
        gauge = Gauge("job_duration_seconds", "Job duration")

        result = gauge.track_duration(lambda: time.sleep(0.01) or "done")

        assert result == "done"
        assert gauge.get() >= 0.01

    def test_track_duration_records_on_failure_and_propagates(self):
        gauge = Gauge("job_duration_seconds", "Job duration")
        gauge.set(-1)

        def failing():
            raise RuntimeError("work failed")

        with pytest.raises(RuntimeError, match="work failed"):
            gauge.track_duration(failing)

        assert gauge.get() >= 0.0

    def test_track_inprogress(self):
        gauge = Gauge("requests_in_progress", "In-flight requests")

        with gauge.track_inprogress():
            assert gauge.get() == 1.0
            with gauge.track_inprogress():
                assert gauge.get() == 2.0

        assert gauge.get() == 0.0

    def test_track_inprogress_decrements_on_failure(self):
        gauge = Gauge("requests_in_progress", "In-flight requests")

        with pytest.raises(RuntimeError):
            with gauge.track_inprogress():
                raise RuntimeError()

        assert gauge.get() == 0.0


# =============================================================================
# Labels Tests
# =============================================================================


class TestLabels:
    """Tests for child lookup by label values."""

    def test_same_values_return_same_child(self):
        counter = Counter("requests_total", "Requests", ["method", "code"])
        assert counter.labels("GET", "200") is counter.labels("GET", "200")

    def test_keyword_and_positional_forms_agree(self):
        counter = Counter("requests_total", "Requests", ["method", "code"])
        child = counter.labels(method="GET", code="200")
        assert counter.labels("GET", "200") is child
        assert counter.labels(["GET", "200"]) is child

    def test_values_are_stringified(self):
        counter = Counter("requests_total", "Requests", ["code"])
        assert counter.labels(200) is counter.labels("200")

    def test_distinct_values_are_independent(self):
        counter = Counter("requests_total", "Requests", ["method"])
        counter.labels("GET").inc()
        counter.labels("POST").inc(5)
        assert counter.labels("GET").get() == 1.0
        assert counter.labels("POST").get() == 5.0

    @pytest.mark.parametrize(
        "args,kwargs",
        [
            (("GET",), {}),
            (("GET", "200", "x"), {}),
            ((), {"method": "GET"}),
            ((), {"method": "GET", "code": "200", "extra": "x"}),
            (("GET",), {"code": "200"}),
        ],
    )
    def test_cardinality_mismatch(self, args, kwargs):
        counter = Counter("requests_total", "Requests", ["method", "code"])
        with pytest.raises(LabelCardinalityMismatch):
            counter.labels(*args, **kwargs)

    def test_labels_on_unlabeled_family_rejected(self):
        counter = Counter("jobs_total", "Jobs")
        with pytest.raises(LabelCardinalityMismatch):
            counter.labels("x")

    def test_labels_without_values_on_unlabeled_family_returns_single_child(self):
        counter = Counter("jobs_total", "Jobs")

        child = counter.labels()
        assert counter.labels([]) is child
        assert counter.labels(()) is child

        child.inc()
        counter.inc(2)
        assert child.get() == 3.0
        assert counter.get() == 3.0
        assert counter.children() == [child]

    def test_keyword_labels_on_unlabeled_family_rejected(self):
        counter = Counter("jobs_total", "Jobs")
        with pytest.raises(LabelCardinalityMismatch):
            counter.labels(kind="x")

    def test_unlabeled_shortcut_on_labeled_family_rejected(self):
        counter = Counter("requests_total", "Requests", ["method"])
        with pytest.raises(LabelCardinalityMismatch):
            counter.inc()

    def test_children_sorted_by_label_values(self):
        gauge = Gauge("workers", "Workers", ["pool"])
        for pool in ("c", "a", "b"):
            gauge.labels(pool).set(1)
        assert [child.labels.values for child in gauge.children()] == [("a",), ("b",), ("c",)]


# =============================================================================
# Declaration Tests
# =============================================================================


class TestDeclaration:
    """Tests for name and label validation at construction."""

    @pytest.mark.parametrize("name", ["", "9lives", "http-requests", "has space", "ünicode"])
    def test_invalid_metric_names(self, name):
        with pytest.raises(InvalidName):
            Counter(name, "help")

    @pytest.mark.parametrize("name", ["a", "_x", "ns:sub_metric", "http_requests_total", "A1"])
    def test_valid_metric_names(self, name):
        assert Counter(name, "help").name == name

    @pytest.mark.parametrize("label", ["le", "1abc", "with-dash", "__internal"])
    def test_invalid_label_names(self, label):
        with pytest.raises(InvalidName):
            Gauge("g", "help", [label])

    def test_duplicate_label_names_rejected(self):
        with pytest.raises(InvalidName):
            Gauge("g", "help", ["a", "a"])

    def test_bare_string_labelnames_rejected(self):
        with pytest.raises(InvalidName):
            Gauge("g", "help", "method")

    def test_namespace_and_subsystem_compose_name(self):
        counter = Counter("requests_total", "Requests", namespace="shop", subsystem="http")
        assert counter.name == "shop_http_requests_total"

    def test_empty_parts_skipped_in_name(self):
        assert Counter("requests_total", "Requests", subsystem="http").name == "http_requests_total"
