"""
Pytest configuration and fixtures for metrics_core tests.
"""

import pytest

from metrics_core import CollectorRegistry, reset_default_registry


@pytest.fixture(autouse=True)
def fresh_default_registry():
    """Every test starts and ends with a fresh process-wide registry."""
    reset_default_registry()
    yield
    reset_default_registry()


@pytest.fixture
def registry():
    """An isolated registry for a single test."""
    return CollectorRegistry()
