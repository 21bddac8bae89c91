"""
Queue fetching with paused queues stripped out.

Before every pull the candidate queues go through the coordinator's
filter, which only consults the in-memory cache. A paused queue is never
popped from, while its jobs stay in Redis until it is resumed.
"""

import asyncio
import logging
from collections.abc import Sequence

import redis.asyncio as aioredis

from queue_pauser.observability.metrics import get_metrics
from queue_pauser.pauser.coordinator import PauseCoordinator
from queue_pauser.types.job import UnitOfWork

logger = logging.getLogger(__name__)


class QueueFetcher:
    """
    Pulls jobs from Redis lists, honoring paused queues.

    Queues are checked in the configured order; the first non-empty one
    wins.
    """

    def __init__(
        self,
        redis: aioredis.Redis,
        coordinator: PauseCoordinator,
        queues: Sequence[str],
        timeout: float = 2.0,
    ):
        """
        Initialize the fetcher.

        Args:
            redis: Async Redis client.
            coordinator: Coordinator owning the paused queue cache.
            queues: Queue names in priority order, in any name form.
            timeout: Seconds to block waiting for a job.
        """
        self._redis = redis
        self._coordinator = coordinator
        self._queues = [coordinator.codec.expand(queue) for queue in queues]
        self.timeout = timeout
        self._metrics = get_metrics()

    @property
    def queues(self) -> list[str]:
        return list(self._queues)

    def queues_cmd(self) -> list[str]:
        """Expanded names of the queues that may be pulled from right now."""
        return list(self._coordinator.filter(self._queues))

    async def retrieve_work(self) -> UnitOfWork | None:
        """
        Pop the next job from the allowed queues.

        Returns:
            The unit of work, or None if nothing arrived within the timeout
            or every queue is paused.
        """
        queues = self.queues_cmd()

        if not queues:
            logger.debug("All queues paused", extra={"queues": self._queues})
            await asyncio.sleep(self.timeout)
            return None

        result = await self._redis.brpop(queues, timeout=self.timeout)
        if result is None:
            return None

        queue, job = result
        name = self._coordinator.codec.normalize(queue)
        self._metrics.record_job_fetched(name)

        return UnitOfWork(queue=name, job=job)
