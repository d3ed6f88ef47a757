"""
Metrics endpoint for Prometheus scraping.

Thin FastAPI router that collects a registry and writes the rendered text
verbatim with the exposition content type.

Usage:
    app.include_router(make_metrics_router())            # default registry at /metrics
    app.include_router(make_metrics_router(registry, path="/internal/metrics"))
"""

from fastapi import APIRouter, Response

from metrics_core.config.settings import settings
from metrics_core.exposition.formatter import generate_latest
from metrics_core.metrics.registry import CollectorRegistry


def make_metrics_router(
    registry: CollectorRegistry | None = None,
    path: str | None = None,
    content_type: str | None = None,
) -> APIRouter:
    """
    Build a router exposing ``registry`` (default registry when omitted).

    ``path`` and ``content_type`` default to ``settings.metrics_path`` and
    ``settings.content_type``.
    """
    router = APIRouter(tags=["Metrics"])
    media_type = content_type or settings.content_type

    @router.get(path or settings.metrics_path, include_in_schema=False)
    def prometheus_metrics() -> Response:
        """
        Expose metrics in Prometheus text format.

        Declared sync so FastAPI runs the collection pass in its threadpool.
        """
        return Response(content=generate_latest(registry), media_type=media_type)

    return router
