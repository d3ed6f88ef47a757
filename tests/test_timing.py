"""
Tests for scoped timing helpers used as context managers and decorators.
"""

import asyncio
import time

import pytest

from metrics_core import Gauge, Histogram
from metrics_core.metrics.timing import Timer, track


class TestTimer:
    """Release-on-exit duration tracking."""

    def test_callback_called_once_with_elapsed(self):
        calls = []
        with Timer(calls.append) as timer:
            time.sleep(0.01)

        assert len(calls) == 1
        assert calls[0] == timer.elapsed
        assert calls[0] >= 0.01

    def test_callback_called_when_block_raises(self):
        calls = []
        with pytest.raises(ZeroDivisionError):
            with Timer(calls.append):
                1 / 0
        assert len(calls) == 1

    def test_exit_without_enter_is_an_error(self):
        with pytest.raises(RuntimeError):
            Timer(lambda _: None).__exit__(None, None, None)

    def test_track_returns_result(self):
        calls = []
        assert track(lambda: "ok", calls.append) == "ok"
        assert len(calls) == 1

    def test_sync_decorator(self):
        histogram = Histogram("job_seconds", "Job")

        @histogram.time()
        def job(x):
            return x * 2

        assert job(3) == 6
        assert job(4) == 8
        assert histogram.get().count == 2
        assert job.__name__ == "job"

    def test_decorator_records_on_failure(self):
        gauge = Gauge("job_seconds", "Job")
        gauge.set(-1)

        @gauge.time()
        def job():
            raise KeyError("x")

        with pytest.raises(KeyError):
            job()
        assert gauge.get() >= 0.0


class TestAsyncDecorators:
    """Decorators keep coroutine functions awaitable."""

    @pytest.mark.asyncio
    async def test_async_histogram_timer(self):
        histogram = Histogram("handler_seconds", "Handler")

        @histogram.time()
        async def handler():
            await asyncio.sleep(0.01)
            return "done"

        assert await handler() == "done"
        state = histogram.get()
        assert state.count == 1
        assert state.sum >= 0.01

    @pytest.mark.asyncio
    async def test_async_inprogress(self):
        gauge = Gauge("inflight", "In flight")
        seen = []

        @gauge.track_inprogress()
        async def handler():
            seen.append(gauge.get())
            await asyncio.sleep(0)

        await asyncio.gather(handler(), handler())

        assert max(seen) >= 1.0
        assert gauge.get() == 0.0

    @pytest.mark.asyncio
    async def test_async_count_exceptions(self):
        from metrics_core import Counter

        failures = Counter("failures_total", "Failures")

        @failures.count_exceptions(ValueError)
        async def handler():
            raise ValueError()

        with pytest.raises(ValueError):
            await handler()
        assert failures.get() == 1.0
