"""
Pytest configuration and shared fixtures.
"""

import os
from collections.abc import AsyncGenerator, Callable

import pytest
import pytest_asyncio
import redis.asyncio as aioredis

from queue_pauser.broadcast.local import LocalBroadcaster, LocalChannel
from queue_pauser.config import Settings
from queue_pauser.pauser.coordinator import PauseCoordinator
from queue_pauser.pauser.names import QueueNameCodec
from queue_pauser.store.memory import InMemoryPausedQueueStore

# Test Redis URL - use a separate database
TEST_REDIS_URL = os.getenv("TEST_REDIS_URL", "redis://localhost:6379/15")


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings."""
    return Settings(
        redis_url=TEST_REDIS_URL,
        pauser_backend="memory",
        pauser_resync_interval_seconds=0.05,
        log_level="DEBUG",
        log_format="console",
        worker_queues=["critical", "default", "low"],
        worker_fetch_timeout_seconds=0.05,
    )


@pytest.fixture
def codec() -> QueueNameCodec:
    """Queue name codec with the default prefix."""
    return QueueNameCodec()


@pytest.fixture
def store() -> InMemoryPausedQueueStore:
    """Paused queue store shared by all coordinators of a test."""
    return InMemoryPausedQueueStore()


@pytest.fixture
def channel() -> LocalChannel:
    """Broadcast channel shared by all coordinators of a test."""
    return LocalChannel()


@pytest.fixture
def make_coordinator(
    store: InMemoryPausedQueueStore,
    channel: LocalChannel,
    codec: QueueNameCodec,
) -> Callable[..., PauseCoordinator]:
    """
    Factory for coordinators standing in for separate processes.

    Every coordinator gets its own broadcaster and cache but shares the
    store and the channel.
    """

    def factory(
        enabled: bool = True,
        resync_interval_seconds: float = 60.0,
    ) -> PauseCoordinator:
        return PauseCoordinator(
            store=store,
            broadcaster=LocalBroadcaster(channel),
            codec=codec,
            enabled=enabled,
            resync_interval_seconds=resync_interval_seconds,
        )

    return factory


@pytest_asyncio.fixture
async def coordinator(
    make_coordinator: Callable[..., PauseCoordinator],
) -> AsyncGenerator[PauseCoordinator]:
    """A set up and subscribed coordinator."""
    coordinator = make_coordinator()
    coordinator.setup()
    await coordinator.broadcaster.start()

    yield coordinator

    await coordinator.stop_watcher()
    await coordinator.broadcaster.stop()


@pytest_asyncio.fixture
async def redis_client() -> AsyncGenerator[aioredis.Redis]:
    """Redis client on the test database, flushed around each test."""
    client = aioredis.from_url(TEST_REDIS_URL, decode_responses=True)
    await client.flushdb()

    yield client

    await client.flushdb()
    await client.aclose()
