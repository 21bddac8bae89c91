"""
FastAPI dependencies.
"""

from typing import Annotated

from fastapi import Depends, Request

from queue_pauser.pauser.coordinator import PauseCoordinator


def get_coordinator(request: Request) -> PauseCoordinator:
    """
    Dependency for the process coordinator.

    Raises:
        RuntimeError: If the application has no coordinator yet.
    """
    coordinator = getattr(request.app.state, "coordinator", None)
    if coordinator is None:
        raise RuntimeError("Coordinator not initialized. Start the application lifespan first.")
    return coordinator


Coordinator = Annotated[PauseCoordinator, Depends(get_coordinator)]
