"""
Exposition module.

Prometheus text format rendering, parsing and the /metrics endpoint.
"""

from metrics_core.exposition.formatter import (
    PrometheusFormatter,
    escape_help,
    escape_label_value,
    format_value,
    generate_latest,
    render,
    render_bytes,
)
from metrics_core.exposition.parser import ParsedFamily, parse_sample, parse_text
from metrics_core.exposition.endpoint import make_metrics_router

__all__ = [
    # Formatter
    "PrometheusFormatter",
    "escape_help",
    "escape_label_value",
    "format_value",
    "generate_latest",
    "render",
    "render_bytes",
    # Parser
    "ParsedFamily",
    "parse_sample",
    "parse_text",
    # Endpoint
    "make_metrics_router",
]
