"""Redis-backed paused queue store.

Redis data structures:
- pauser:paused_queues - Set with normalized names of paused queues
"""

import logging

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from queue_pauser.constants import DEFAULT_PAUSED_QUEUES_KEY
from queue_pauser.errors import StoreUnavailableError
from queue_pauser.store.base import PausedQueueStore

logger = logging.getLogger(__name__)


class RedisPausedQueueStore(PausedQueueStore):
    """Paused queue set kept in a single Redis set."""

    def __init__(
        self,
        redis: aioredis.Redis,
        key: str = DEFAULT_PAUSED_QUEUES_KEY,
    ) -> None:
        """Initialize the store.

        Args:
            redis: Async Redis client (``decode_responses=True``).
            key: Redis key of the paused queues set.
        """
        self._redis = redis
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    async def add(self, queue: str) -> None:
        try:
            await self._redis.sadd(self._key, queue)
        except RedisError as e:
            raise StoreUnavailableError(f"Failed to pause queue {queue!r}: {e}") from e

    async def remove(self, queue: str) -> None:
        try:
            await self._redis.srem(self._key, queue)
        except RedisError as e:
            raise StoreUnavailableError(f"Failed to resume queue {queue!r}: {e}") from e

    async def contains(self, queue: str) -> bool:
        try:
            return bool(await self._redis.sismember(self._key, queue))
        except RedisError as e:
            raise StoreUnavailableError(f"Failed to read queue {queue!r}: {e}") from e

    async def members(self) -> set[str]:
        try:
            members = await self._redis.smembers(self._key)
        except RedisError as e:
            raise StoreUnavailableError(f"Failed to list paused queues: {e}") from e
        return {_to_str(member) for member in members}

    async def ping(self) -> bool:
        try:
            return bool(await self._redis.ping())
        except RedisError:
            logger.warning("Redis ping failed", exc_info=True)
            return False


def _to_str(value: str | bytes) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value
