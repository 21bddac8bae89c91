"""
Unit tests for queue fetching.
"""

from collections.abc import Callable

from queue_pauser.pauser.coordinator import PauseCoordinator
from queue_pauser.worker.fetch import QueueFetcher


class RecordingRedis:
    """Redis stand-in recording BRPOP calls."""

    def __init__(self, result: tuple[str, str] | None = None):
        self.result = result
        self.calls: list[tuple[list[str], float]] = []

    async def brpop(self, keys: list[str], timeout: float = 0):
        self.calls.append((list(keys), timeout))
        return self.result


class TestQueueFetcher:
    """Tests for QueueFetcher."""

    def test_queues_expanded(self, coordinator: PauseCoordinator):
        """Test configured queues are expanded once."""
        fetcher = QueueFetcher(RecordingRedis(), coordinator, ["critical", "queue:default"])

        assert fetcher.queues == ["queue:critical", "queue:default"]

    async def test_queues_cmd_skips_paused(self, coordinator: PauseCoordinator):
        """Test paused queues are left out of the fetch."""
        fetcher = QueueFetcher(RecordingRedis(), coordinator, ["critical", "default", "low"])

        await coordinator.pause("default")

        assert fetcher.queues_cmd() == ["queue:critical", "queue:low"]

    async def test_retrieve_work(self, coordinator: PauseCoordinator):
        """Test a popped job becomes a unit of work with a normalized queue."""
        redis = RecordingRedis(result=("queue:low", '{"job_type": "echo"}'))
        fetcher = QueueFetcher(redis, coordinator, ["default", "low"], timeout=0.5)
        await coordinator.pause("default")

        work = await fetcher.retrieve_work()

        assert work is not None
        assert work.queue == "low"
        assert work.job == '{"job_type": "echo"}'
        assert redis.calls == [(["queue:low"], 0.5)]

    async def test_retrieve_work_timeout(self, coordinator: PauseCoordinator):
        """Test an empty fetch returns None."""
        fetcher = QueueFetcher(RecordingRedis(), coordinator, ["default"], timeout=0.01)

        assert await fetcher.retrieve_work() is None

    async def test_all_paused_skips_redis(
        self,
        coordinator: PauseCoordinator,
    ):
        """Test no BRPOP is issued while every queue is paused."""
        redis = RecordingRedis(result=("queue:default", "{}"))
        fetcher = QueueFetcher(redis, coordinator, ["default"], timeout=0.01)
        await coordinator.pause("default")

        assert await fetcher.retrieve_work() is None
        assert redis.calls == []

    async def test_disabled_coordinator_fetches_everything(
        self,
        make_coordinator: Callable[..., PauseCoordinator],
    ):
        """Test a disabled coordinator leaves the queue list alone."""
        coordinator = make_coordinator(enabled=False)
        fetcher = QueueFetcher(RecordingRedis(), coordinator, ["critical", "default"])

        assert fetcher.queues_cmd() == ["queue:critical", "queue:default"]

    async def test_resume_restores_fetch(self, coordinator: PauseCoordinator):
        """Test a resumed queue is fetched from again."""
        fetcher = QueueFetcher(RecordingRedis(), coordinator, ["default"])

        await coordinator.pause("default")
        assert fetcher.queues_cmd() == []

        await coordinator.resume("default")
        assert fetcher.queues_cmd() == ["queue:default"]
