"""
Collector registry: the catalog of metric families.

Enforces that a name maps to exactly one family shape, and that no two
families render overlapping sample names. Families are kept in registration
order, which is also the order of collect() and of the rendered output.

A process-wide default registry is created lazily on first use. Independent
registries can be constructed freely, e.g. one per test.
"""

from __future__ import annotations

import threading
from typing import Iterator, Mapping

from metrics_core.config.logging import get_logger
from metrics_core.core.exceptions import DuplicateName, UnknownCollector
from metrics_core.metrics.families import MetricFamily
from metrics_core.metrics.snapshot import RegistrySnapshot

logger = get_logger(__name__)


class CollectorRegistry:
    """
    Thread-safe registry of metric families.

    Usage:
        registry = CollectorRegistry()
        jobs = Counter("jobs_total", "Jobs processed").register(registry)
        snapshot = registry.collect()
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._families: dict[str, MetricFamily] = {}
        # Sample name -> owning family name, for collision checks
        self._sample_owners: dict[str, str] = {}

    def register(self, family: MetricFamily) -> MetricFamily:
        """
        Register a family and return the registered instance.

        Re-registering an identical-shape family under the same name returns
        the family already registered. A different shape raises DuplicateName.
        """
        name = family.name
        with self._lock:
            existing = self._families.get(name)
            if existing is not None:
                if existing is family or existing.shape() == family.shape():
                    return existing
                raise DuplicateName(
                    name,
                    existing_kind=existing.kind.value,
                    new_kind=family.kind.value,
                )

            for sample in family.sample_names():
                owner = self._sample_owners.get(sample)
                if owner is not None:
                    raise DuplicateName(
                        name,
                        reason=f"sample name {sample!r} collides with metric {owner!r}",
                    )

            self._families[name] = family
            for sample in family.sample_names():
                self._sample_owners[sample] = name

        logger.debug("Metric registered", metric=name, kind=family.kind.value)
        return family

    def unregister(self, family: MetricFamily | str) -> None:
        """Remove a family, by instance or by name."""
        name = family if isinstance(family, str) else family.name
        with self._lock:
            registered = self._families.get(name)
            if registered is None or (not isinstance(family, str) and registered is not family):
                raise UnknownCollector(name)
            del self._families[name]
            for sample in registered.sample_names():
                self._sample_owners.pop(sample, None)

        logger.debug("Metric unregistered", metric=name)

    def get(self, name: str) -> MetricFamily:
        with self._lock:
            family = self._families.get(name)
        if family is None:
            raise UnknownCollector(name)
        return family

    def names(self) -> list[str]:
        with self._lock:
            return list(self._families)

    def collect(self) -> RegistrySnapshot:
        """
        Snapshot every registered family.

        The family list is copied under the registry lock, then each family
        is collected without holding it, so updates and registrations are
        never blocked for the whole pass.
        """
        with self._lock:
            families = list(self._families.values())
        return RegistrySnapshot(tuple(family.collect() for family in families))

    def get_sample_value(self, name: str, labels: Mapping[str, str] | None = None) -> float | None:
        """
        Current value of one rendered sample, or None if absent.

        Example:
            registry.get_sample_value("latency_seconds_bucket", {"le": "0.5"})
        """
        wanted = dict(labels or {})
        for sample in self.collect().samples():
            if sample.name == name and sample.label_dict() == wanted:
                return sample.value
        return None

    def clear(self) -> None:
        """Drop every registered family."""
        with self._lock:
            self._families.clear()
            self._sample_owners.clear()

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._families

    def __len__(self) -> int:
        with self._lock:
            return len(self._families)

    def __iter__(self) -> Iterator[MetricFamily]:
        with self._lock:
            return iter(list(self._families.values()))


# =============================================================================
# Default registry
# =============================================================================

_default_registry: CollectorRegistry | None = None
_default_lock = threading.Lock()


def get_default_registry() -> CollectorRegistry:
    """Get the process-wide registry, creating it on first use."""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            _default_registry = CollectorRegistry()
            logger.debug("Default registry created")
        return _default_registry


def reset_default_registry() -> None:
    """Discard the process-wide registry; the next access creates a fresh one."""
    global _default_registry
    with _default_lock:
        _default_registry = None
