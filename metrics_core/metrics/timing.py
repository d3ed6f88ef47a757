"""
Scoped duration tracking.

A Timer measures wall-clock time around a unit of work and hands the elapsed
seconds to an update callback exactly once, on exit, whether the work
succeeded or raised. Failures from the work still propagate after the update.

Usage:
    with Timer(histogram.observe):
        do_work()

    @Timer(gauge.set)
    def job(): ...

    @Timer(histogram.observe)
    async def handler(): ...
"""

from __future__ import annotations

import functools
import inspect
import time
from typing import Any, Callable, TypeVar

F = TypeVar("F", bound=Callable[..., Any])


class Timer:
    """Context manager and decorator applying ``callback(elapsed_seconds)`` on exit."""

    def __init__(self, callback: Callable[[float], Any]):
        self._callback = callback
        self._start: float | None = None
        self.elapsed: float | None = None

    def _stop(self) -> None:
        if self._start is None:
            raise RuntimeError("Timer was not started")
        self.elapsed = max(time.perf_counter() - self._start, 0.0)
        self._start = None
        self._callback(self.elapsed)

    def __enter__(self) -> Timer:
        self._start = time.perf_counter()
        self.elapsed = None
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self._stop()

    def __call__(self, func: F) -> F:
        # Each invocation gets its own Timer so concurrent calls never share state
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with Timer(self._callback):
                    return await func(*args, **kwargs)

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with Timer(self._callback):
                return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]


def track(work: Callable[[], Any], callback: Callable[[float], Any]) -> Any:
    """Run ``work``, apply ``callback(elapsed)`` once, and return the work's result."""
    with Timer(callback):
        return work()


class InProgress:
    """Context manager and decorator running ``enter()`` before and ``leave()`` after the work."""

    def __init__(self, enter: Callable[[], Any], leave: Callable[[], Any]):
        self._enter = enter
        self._leave = leave

    def __enter__(self) -> InProgress:
        self._enter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self._leave()

    def __call__(self, func: F) -> F:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with self:
                    return await func(*args, **kwargs)

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with self:
                return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]


class ExceptionCounter:
    """Context manager and decorator calling ``on_error()`` when the work raises ``exc_type``."""

    def __init__(self, on_error: Callable[[], Any], exc_type: type[BaseException] | tuple[type[BaseException], ...] = Exception):
        self._on_error = on_error
        self._exc_type = exc_type

    def __enter__(self) -> ExceptionCounter:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is not None and issubclass(exc_type, self._exc_type):
            self._on_error()
        return False

    def __call__(self, func: F) -> F:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with self:
                    return await func(*args, **kwargs)

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with self:
                return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]
