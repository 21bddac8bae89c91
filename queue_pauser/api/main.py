"""
FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from queue_pauser import __version__
from queue_pauser.api.routes import health_router, queues_router
from queue_pauser.config import get_settings
from queue_pauser.errors import BroadcastError, InvalidQueueNameError, StoreUnavailableError
from queue_pauser.observability.logging import setup_logging
from queue_pauser.observability.metrics import setup_metrics
from queue_pauser.observability.tracing import instrument_fastapi, setup_tracing
from queue_pauser.pauser.coordinator import PauseCoordinator
from queue_pauser.pauser.factory import build_coordinator
from queue_pauser.store.connection import close_redis, init_redis

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Builds the process coordinator unless one was injected. The API only
    mutates and reads the shared store, so it does not subscribe to
    broadcasts or run the resync watcher.
    """
    # Startup
    setup_logging(role="api")
    setup_metrics()
    setup_tracing()

    owns_redis = getattr(app.state, "coordinator", None) is None
    if owns_redis:
        settings = get_settings()
        redis = await init_redis() if settings.pauser_backend == "redis" else None
        app.state.coordinator = build_coordinator(settings, redis=redis)

    logger.info("Application started")

    yield

    # Shutdown
    if owns_redis:
        await close_redis()
    logger.info("Application shutdown")


async def store_unavailable_handler(request: Request, exc: StoreUnavailableError) -> JSONResponse:
    logger.error(f"Shared store unavailable: {exc}", extra={"path": request.url.path})
    return JSONResponse(
        status_code=503,
        content={"error": "Shared store unavailable", "detail": str(exc)},
    )


async def broadcast_error_handler(request: Request, exc: BroadcastError) -> JSONResponse:
    logger.error(f"Broadcast failed: {exc}", extra={"path": request.url.path})
    return JSONResponse(
        status_code=503,
        content={
            "error": "Broadcast failed",
            "detail": (
                "The shared store was updated; other processes pick up the "
                f"change on their next resync. {exc}"
            ),
        },
    )


async def invalid_queue_name_handler(request: Request, exc: InvalidQueueNameError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"error": "Invalid queue name", "detail": str(exc)},
    )


def create_app(coordinator: PauseCoordinator | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        coordinator: Coordinator to serve. Built from settings on startup
            when omitted.

    Returns:
        FastAPI: The configured application instance.
    """
    app = FastAPI(
        title="Queue Pauser API",
        description="Pause and resume job queues across all worker processes",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    if coordinator is not None:
        app.state.coordinator = coordinator

    app.add_exception_handler(StoreUnavailableError, store_unavailable_handler)
    app.add_exception_handler(BroadcastError, broadcast_error_handler)
    app.add_exception_handler(InvalidQueueNameError, invalid_queue_name_handler)

    # Include routers
    app.include_router(health_router)
    app.include_router(queues_router)

    # Instrument with OpenTelemetry
    instrument_fastapi(app)

    return app


def run() -> None:
    """Run the API server."""
    settings = get_settings()

    uvicorn.run(
        "queue_pauser.api.main:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
