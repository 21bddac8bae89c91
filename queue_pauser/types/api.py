"""
API request and response type definitions.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class QueueStatusResponse(BaseModel):
    """Pause status of a single queue."""

    name: str = Field(..., description="Normalized queue name")
    paused: bool
    message: str | None = None


class PausedQueuesResponse(BaseModel):
    """All currently paused queues."""

    paused: list[str] = Field(default_factory=list, description="Sorted normalized queue names")
    enabled: bool = True


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    redis: str
    pauser_enabled: bool
    timestamp: datetime


class ErrorResponse(BaseModel):
    """Error response body."""

    error: str
    detail: str | None = None
