"""
Redis connection management.
Handles creation and disposal of the process-wide async Redis client.
"""

import logging

import redis.asyncio as aioredis

from queue_pauser.config import get_settings

logger = logging.getLogger(__name__)

# Global client instance
_redis: aioredis.Redis | None = None


def get_redis() -> aioredis.Redis:
    """
    Get or create the async Redis client.

    The client owns a connection pool; pub/sub listeners borrow dedicated
    connections from it.

    Returns:
        Redis: The process-wide Redis client.
    """
    global _redis
    if _redis is None:
        settings = get_settings()
        _redis = aioredis.from_url(settings.redis_url, decode_responses=True)
    return _redis


async def init_redis() -> aioredis.Redis:
    """
    Initialize the Redis client and check connectivity.
    Should be called on process startup.
    """
    client = get_redis()
    await client.ping()
    logger.info("Redis connection initialized")
    return client


async def close_redis() -> None:
    """
    Close the Redis client.
    Should be called on process shutdown.
    """
    global _redis
    if _redis is not None:
        await _redis.aclose()
        _redis = None
        logger.info("Redis connection closed")
