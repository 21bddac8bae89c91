"""
Job-related type definitions for internal use.
"""

import json
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel


class JobResult(BaseModel):
    """
    Result of job execution.
    Returned by job handlers after processing.
    """

    success: bool
    output: dict[str, Any] | None = None
    error: str | None = None


@dataclass
class UnitOfWork:
    """
    A job popped from a queue.

    ``queue`` is the normalized queue name, ``job`` the raw payload exactly
    as it was stored in the queue list.
    """

    queue: str
    job: str

    @property
    def payload(self) -> dict[str, Any]:
        """Decode the job payload. Non-JSON payloads are wrapped as ``{"raw": ...}``."""
        try:
            decoded = json.loads(self.job)
        except (json.JSONDecodeError, TypeError):
            return {"raw": self.job}
        if not isinstance(decoded, dict):
            return {"raw": decoded}
        return decoded

    @property
    def job_type(self) -> str | None:
        """Job type used to select a handler."""
        job_type = self.payload.get("job_type")
        return job_type if isinstance(job_type, str) else None
