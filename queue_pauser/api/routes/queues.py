"""
Queue pause management routes.
"""

import logging

from fastapi import APIRouter, HTTPException, status

from queue_pauser.api.dependencies import Coordinator
from queue_pauser.constants import API_V1_PREFIX
from queue_pauser.types.api import ErrorResponse, PausedQueuesResponse, QueueStatusResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix=f"{API_V1_PREFIX}/queues",
    tags=["Queues"],
    responses={
        422: {"model": ErrorResponse, "description": "Invalid queue name"},
        503: {"model": ErrorResponse, "description": "Shared store unavailable"},
    },
)


def _require_enabled(coordinator) -> None:
    if not coordinator.enabled:
        logger.warning("Rejected queue mutation, pausing disabled")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Queue pausing is disabled",
        )


@router.get(
    "/paused",
    response_model=PausedQueuesResponse,
    summary="List paused queues",
    description="List all paused queues as recorded in the shared store.",
)
async def list_paused_queues(coordinator: Coordinator) -> PausedQueuesResponse:
    """
    List paused queues.

    Returns an empty list when queue pausing is disabled.
    """
    paused = await coordinator.list_paused()
    return PausedQueuesResponse(paused=sorted(paused), enabled=coordinator.enabled)


@router.get(
    "/{name}",
    response_model=QueueStatusResponse,
    summary="Get queue pause status",
)
async def get_queue_status(name: str, coordinator: Coordinator) -> QueueStatusResponse:
    """Check the shared store for whether a queue is paused."""
    paused = await coordinator.is_paused(name)
    return QueueStatusResponse(name=coordinator.codec.normalize(name), paused=paused)


@router.post(
    "/{name}/pause",
    response_model=QueueStatusResponse,
    summary="Pause a queue",
    description="Pause a queue in every worker process. Pausing a paused queue is a no-op.",
)
async def pause_queue(name: str, coordinator: Coordinator) -> QueueStatusResponse:
    """
    Pause a queue.

    Raises:
        HTTPException: 409 if queue pausing is disabled.
    """
    _require_enabled(coordinator)

    queue = coordinator.codec.normalize(name)
    await coordinator.pause(queue)

    return QueueStatusResponse(name=queue, paused=True, message="Queue paused")


@router.post(
    "/{name}/resume",
    response_model=QueueStatusResponse,
    summary="Resume a queue",
)
async def resume_queue(name: str, coordinator: Coordinator) -> QueueStatusResponse:
    """
    Resume a queue.

    Raises:
        HTTPException: 409 if queue pausing is disabled.
    """
    _require_enabled(coordinator)

    queue = coordinator.codec.normalize(name)
    await coordinator.resume(queue)

    return QueueStatusResponse(name=queue, paused=False, message="Queue resumed")
