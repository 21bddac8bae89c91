"""
Job handlers registry.

Handlers receive the unit of work popped from a queue. Running the job is
the handler's business; the worker only routes by ``job_type``.
"""

import logging
from typing import Awaitable, Callable

from queue_pauser.types.job import JobResult, UnitOfWork

logger = logging.getLogger(__name__)

# Type alias for job handler functions
JobHandler = Callable[[UnitOfWork], Awaitable[JobResult]]

# Handler registry
_handlers: dict[str, JobHandler] = {}


def register_handler(job_type: str) -> Callable[[JobHandler], JobHandler]:
    """
    Decorator to register a job handler.

    Args:
        job_type: The job type this handler processes.

    Example:
        @register_handler("send_email")
        async def handle_send_email(work: UnitOfWork) -> JobResult:
            ...
    """
    def decorator(handler: JobHandler) -> JobHandler:
        _handlers[job_type] = handler
        logger.info(f"Registered handler for job type: {job_type}")
        return handler
    return decorator


def get_handler(job_type: str) -> JobHandler | None:
    """Get the handler for a job type, or None if not found."""
    return _handlers.get(job_type)


def list_handlers() -> list[str]:
    """List all registered job types."""
    return list(_handlers.keys())


@register_handler("echo")
async def handle_echo(work: UnitOfWork) -> JobResult:
    """Echo handler; returns the payload as output."""
    logger.info("Echo job executing", extra={"queue": work.queue})

    return JobResult(
        success=True,
        output={"echo": work.payload},
    )


async def execute_job(work: UnitOfWork) -> JobResult:
    """
    Execute a unit of work using the handler for its job type.

    Handler exceptions are turned into failed results.
    """
    job_type = work.job_type or "echo"

    handler = get_handler(job_type)
    if handler is None:
        logger.error(
            f"No handler for job type: {job_type}",
            extra={"queue": work.queue},
        )
        return JobResult(
            success=False,
            error=f"No handler registered for job type: {job_type}",
        )

    try:
        return await handler(work)
    except Exception as e:
        logger.exception(
            "Handler raised exception",
            extra={"queue": work.queue, "job_type": job_type},
        )
        return JobResult(
            success=False,
            error=f"Handler exception: {e}",
        )
