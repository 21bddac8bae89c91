"""
API routes module.
"""

from queue_pauser.api.routes.health import router as health_router
from queue_pauser.api.routes.queues import router as queues_router

__all__ = ["queues_router", "health_router"]
