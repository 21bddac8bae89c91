"""
Shared store module.
Contains the paused queue store implementations and Redis connection management.
"""

from queue_pauser.store.base import PausedQueueStore
from queue_pauser.store.connection import close_redis, get_redis, init_redis
from queue_pauser.store.memory import InMemoryPausedQueueStore
from queue_pauser.store.redis import RedisPausedQueueStore

__all__ = [
    "PausedQueueStore",
    "RedisPausedQueueStore",
    "InMemoryPausedQueueStore",
    "get_redis",
    "init_redis",
    "close_redis",
]
