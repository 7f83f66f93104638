"""Prometheus scrape endpoint."""

from fastapi import APIRouter, Response

from ..core.observability import get_prometheus_metrics

router = APIRouter()


@router.get(
    "/metrics",
    summary="Prometheus Metrics",
    response_class=Response,
    tags=["observability"]
)
async def metrics() -> Response:
    """Return the service's metrics in Prometheus text format."""
    return Response(
        content=get_prometheus_metrics(),
        media_type="text/plain; version=0.0.4; charset=utf-8"
    )
