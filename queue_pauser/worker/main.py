"""
Worker process for pulling jobs from queues.

The worker pulls jobs from the configured queues, skipping paused ones,
and hands them to the registered handlers. Pause state is kept current by
the process coordinator, wired into the worker lifecycle.
"""

import asyncio
import logging
import os
import signal

import redis.asyncio as aioredis

from queue_pauser.config import get_settings
from queue_pauser.constants import LifecyclePhase
from queue_pauser.lifecycle import ProcessLifecycle
from queue_pauser.observability.logging import bind_context, clear_context, setup_logging
from queue_pauser.observability.metrics import setup_metrics
from queue_pauser.observability.tracing import get_tracer, setup_tracing
from queue_pauser.pauser.coordinator import PauseCoordinator
from queue_pauser.pauser.factory import build_coordinator
from queue_pauser.store.connection import close_redis, init_redis
from queue_pauser.types.job import UnitOfWork
from queue_pauser.worker.fetch import QueueFetcher
from queue_pauser.worker.handlers import execute_job

logger = logging.getLogger(__name__)


class Worker:
    """
    Job worker that fetches from unpaused queues.

    Features:
    - Queue selection through the coordinator's in-memory filter
    - Graceful shutdown on SIGTERM/SIGINT
    - Lifecycle phases driving the pause state subscription and resync
    """

    def __init__(
        self,
        redis: aioredis.Redis,
        coordinator: PauseCoordinator,
        lifecycle: ProcessLifecycle | None = None,
        worker_id: str | None = None,
        queues: list[str] | None = None,
        fetch_timeout: float | None = None,
    ):
        """
        Initialize the worker.

        Args:
            redis: Async Redis client holding the queue lists.
            coordinator: Process coordinator, not yet set up.
            lifecycle: Process lifecycle. A fresh one is created if omitted.
            worker_id: Unique worker identifier. Defaults to hostname + PID.
            queues: Queue names in priority order.
            fetch_timeout: Seconds to block per fetch.
        """
        settings = get_settings()

        self.worker_id = worker_id or settings.worker_id or f"{os.uname().nodename}-{os.getpid()}"
        self.lifecycle = lifecycle or ProcessLifecycle()
        self.coordinator = coordinator
        self.fetcher = QueueFetcher(
            redis,
            coordinator,
            queues or settings.worker_queues,
            timeout=fetch_timeout or settings.worker_fetch_timeout_seconds,
        )

        self._running = False

        coordinator.broadcaster.attach(self.lifecycle)
        coordinator.setup(self.lifecycle)

    async def start(self) -> None:
        """Start the worker and run until stopped."""
        logger.info(
            "Worker starting",
            extra={"worker_id": self.worker_id, "queues": self.fetcher.queues},
        )

        self._running = True
        await self.lifecycle.advance(LifecyclePhase.RUNNING)

        while self._running:
            try:
                work = await self.fetcher.retrieve_work()
                if work is not None:
                    await self._process(work)
            except Exception as e:
                logger.exception(
                    f"Error in worker loop: {e}",
                    extra={"worker_id": self.worker_id},
                )
                await asyncio.sleep(self.fetcher.timeout)

        await self.lifecycle.advance(LifecyclePhase.STOPPED)
        logger.info("Worker stopped", extra={"worker_id": self.worker_id})

    async def stop(self) -> None:
        """Quiesce the worker; the current fetch finishes first."""
        if not self._running:
            return

        logger.info("Worker stopping", extra={"worker_id": self.worker_id})
        self._running = False
        await self.lifecycle.advance(LifecyclePhase.QUIESCING)

    async def _process(self, work: UnitOfWork) -> None:
        with get_tracer().start_as_current_span("execute_job") as span:
            span.set_attribute("queue", work.queue)
            result = await execute_job(work)

        if result.success:
            logger.info("Job completed", extra={"queue": work.queue})
        else:
            logger.warning(
                "Job failed",
                extra={"queue": work.queue, "error": result.error},
            )


async def run_async() -> None:
    """Run the worker asynchronously."""
    setup_logging(role="worker")
    setup_metrics()
    setup_tracing()

    redis = await init_redis()
    coordinator = build_coordinator(redis=redis)

    lifecycle = ProcessLifecycle()
    worker = Worker(redis, coordinator, lifecycle=lifecycle)
    bind_context(worker_id=worker.worker_id)

    lifecycle.on(LifecyclePhase.STOPPED, close_redis)
    await lifecycle.advance(LifecyclePhase.STARTING)

    # Handle shutdown signals
    loop = asyncio.get_running_loop()

    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(
            sig,
            lambda: asyncio.create_task(worker.stop())
        )

    try:
        await worker.start()
    finally:
        clear_context()


def run() -> None:
    """Run the worker."""
    asyncio.run(run_async())


if __name__ == "__main__":
    run()
