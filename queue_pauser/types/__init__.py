"""
Type definitions for queue pausing.
Contains wire, API and job type definitions, grouped by module.
"""

from queue_pauser.types.api import (
    ErrorResponse,
    HealthResponse,
    PausedQueuesResponse,
    QueueStatusResponse,
)
from queue_pauser.types.events import BroadcastMessage
from queue_pauser.types.job import JobResult, UnitOfWork

__all__ = [
    # API types
    "QueueStatusResponse",
    "PausedQueuesResponse",
    "HealthResponse",
    "ErrorResponse",
    # Event types
    "BroadcastMessage",
    # Job types
    "JobResult",
    "UnitOfWork",
]
