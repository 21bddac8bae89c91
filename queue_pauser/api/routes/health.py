"""
Health check routes.
"""

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import Response

from queue_pauser import __version__
from queue_pauser.api.dependencies import Coordinator
from queue_pauser.observability.metrics import get_metrics
from queue_pauser.types.api import HealthResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check the health of the API and the shared store connection.",
)
async def health_check(coordinator: Coordinator) -> HealthResponse:
    """
    Perform a health check.

    Checks shared store connectivity and returns service status.
    """
    store_status = "healthy" if await coordinator.store.ping() else "unhealthy"

    return HealthResponse(
        status="healthy" if store_status == "healthy" else "degraded",
        version=__version__,
        redis=store_status,
        pauser_enabled=coordinator.enabled,
        timestamp=datetime.now(timezone.utc),
    )


@router.get(
    "/ready",
    summary="Readiness check",
    description="Check if the service is ready to receive traffic.",
)
async def readiness_check(coordinator: Coordinator) -> dict:
    """Kubernetes readiness endpoint."""
    return {"ready": await coordinator.store.ping()}


@router.get(
    "/live",
    summary="Liveness check",
    description="Check if the service is alive.",
)
async def liveness_check() -> dict:
    """Kubernetes liveness endpoint."""
    return {"alive": True}


@router.get(
    "/metrics",
    summary="Prometheus metrics",
    description="Expose Prometheus metrics.",
)
async def metrics() -> Response:
    """Expose Prometheus metrics."""
    metrics_collector = get_metrics()
    return Response(
        content=metrics_collector.get_metrics(),
        media_type=metrics_collector.get_content_type(),
    )
