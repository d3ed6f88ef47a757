"""
Prometheus text exposition format.

Renders a RegistrySnapshot as text. Pure function of the snapshot: no I/O,
the caller writes the result wherever it wants (HTTP body, file, stdout).

Reference: https://prometheus.io/docs/instrumenting/exposition_formats/

Usage:
    text = render(registry.collect())
    body = generate_latest(registry)
"""

from __future__ import annotations

import math

from metrics_core.metrics.registry import CollectorRegistry, get_default_registry
from metrics_core.metrics.snapshot import FamilySnapshot, RegistrySnapshot, Sample

# Integral floats at or above this magnitude render in repr() form
_INTEGRAL_LIMIT = 1e15


def format_value(value: float) -> str:
    """
    Render a number so Prometheus parses it back as the same float.

    Examples:
        1.0 -> "1", 0.25 -> "0.25", inf -> "+Inf", nan -> "NaN"
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value.is_integer() and abs(value) < _INTEGRAL_LIMIT:
        return str(int(value))
    return repr(value)


def escape_help(text: str) -> str:
    """HELP text escapes backslash and newline only."""
    return text.replace("\\", "\\\\").replace("\n", "\\n")


def escape_label_value(value: str) -> str:
    """Label values escape backslash, double quote and newline."""
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


class PrometheusFormatter:
    """
    Formats snapshots in Prometheus text exposition format.

    Every family block is self-contained and newline-terminated, so the
    output of several renders can be concatenated into a valid document.
    """

    def format_sample(self, sample: Sample) -> str:
        if sample.labels:
            label_str = ",".join(f'{k}="{escape_label_value(v)}"' for k, v in sample.labels)
            return f"{sample.name}{{{label_str}}} {format_value(sample.value)}"
        return f"{sample.name} {format_value(sample.value)}"

    def format_family(self, family: FamilySnapshot) -> str:
        lines = [
            f"# HELP {family.name} {escape_help(family.help)}",
            f"# TYPE {family.name} {family.kind.value}",
        ]
        lines.extend(self.format_sample(sample) for sample in family.samples(format_value))
        return "\n".join(lines) + "\n"

    def format_snapshot(self, snapshot: RegistrySnapshot) -> str:
        return "".join(self.format_family(family) for family in snapshot)


# =============================================================================
# Module-level helpers
# =============================================================================

_formatter = PrometheusFormatter()


def render(snapshot: RegistrySnapshot) -> str:
    """Render a snapshot as exposition text."""
    return _formatter.format_snapshot(snapshot)


def render_bytes(snapshot: RegistrySnapshot) -> bytes:
    """Render a snapshot as UTF-8 encoded exposition text."""
    return render(snapshot).encode("utf-8")


def generate_latest(registry: CollectorRegistry | None = None) -> bytes:
    """Collect ``registry`` (the default registry when omitted) and render it."""
    if registry is None:
        registry = get_default_registry()
    return render_bytes(registry.collect())
