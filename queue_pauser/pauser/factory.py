"""
Coordinator construction from settings.
"""

import redis.asyncio as aioredis

from queue_pauser.broadcast.base import Broadcaster
from queue_pauser.broadcast.local import LocalBroadcaster, LocalChannel
from queue_pauser.broadcast.redis import RedisBroadcaster
from queue_pauser.config import Settings, get_settings
from queue_pauser.pauser.coordinator import PauseCoordinator
from queue_pauser.pauser.names import QueueNameCodec
from queue_pauser.store.base import PausedQueueStore
from queue_pauser.store.connection import get_redis
from queue_pauser.store.memory import InMemoryPausedQueueStore
from queue_pauser.store.redis import RedisPausedQueueStore


def build_coordinator(
    settings: Settings | None = None,
    redis: aioredis.Redis | None = None,
    channel: LocalChannel | None = None,
) -> PauseCoordinator:
    """
    Build the process coordinator for the configured backend.

    Args:
        settings: Settings to use. Defaults to the cached settings.
        redis: Redis client for the ``redis`` backend. Defaults to the
            process-wide client.
        channel: Channel for the ``memory`` backend, shared by coordinators
            that should see each other's messages.

    Returns:
        PauseCoordinator: A coordinator that still has to be ``setup``.
    """
    settings = settings or get_settings()

    store: PausedQueueStore
    broadcaster: Broadcaster
    if settings.pauser_backend == "memory":
        store = InMemoryPausedQueueStore()
        broadcaster = LocalBroadcaster(channel)
    else:
        client = redis or get_redis()
        store = RedisPausedQueueStore(client, key=settings.paused_queues_key)
        broadcaster = RedisBroadcaster(
            client,
            channel=settings.pauser_channel,
            reconnect_delay=settings.pauser_reconnect_delay_seconds,
        )

    return PauseCoordinator(
        store=store,
        broadcaster=broadcaster,
        codec=QueueNameCodec(settings.queue_prefix),
        enabled=settings.pauser_enabled,
        resync_interval_seconds=settings.pauser_resync_interval_seconds,
    )
