"""
Periodic resync of the paused queue cache.

Broadcast messages can be lost, so every process reloads the full paused
set on a fixed interval. The first run happens as soon as the watcher
starts.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from queue_pauser.constants import DEFAULT_RESYNC_INTERVAL_SECONDS, SPAN_RESYNC
from queue_pauser.observability.metrics import get_metrics
from queue_pauser.observability.tracing import get_tracer

logger = logging.getLogger(__name__)


class ResyncWatcher:
    """
    Timer task that runs a sync callback now and then every interval.

    A failing run is logged and retried on the next tick; the loop itself
    only ends when stopped.
    """

    def __init__(
        self,
        sync: Callable[[], Awaitable[None]],
        interval_seconds: float = DEFAULT_RESYNC_INTERVAL_SECONDS,
    ):
        """
        Initialize the watcher.

        Args:
            sync: Coroutine function performing one full resync.
            interval_seconds: Seconds between the end of one run and the next.
        """
        self.interval = interval_seconds
        self._sync = sync
        self._task: asyncio.Task | None = None
        self._metrics = get_metrics()

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, run_now: bool = True) -> None:
        """
        Schedule the timer on the running event loop.

        Args:
            run_now: Run the first sync right away. When False the first
                run waits one interval, for callers that already synced.
        """
        if self._task is not None:
            return

        logger.info(f"Resync watcher starting with interval {self.interval}s")
        self._task = asyncio.get_running_loop().create_task(self._run(run_now))

    async def stop(self) -> None:
        """Cancel the timer and wait for it to finish."""
        if self._task is None:
            return

        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Resync watcher stopped")

    async def run_once(self) -> bool:
        """
        Run a single resync.

        Returns:
            True if the resync succeeded.
        """
        try:
            with get_tracer().start_as_current_span(SPAN_RESYNC):
                await self._sync()
        except Exception as e:
            logger.exception(f"Error in resync watcher: {e}")
            self._metrics.record_resync(success=False)
            return False

        self._metrics.record_resync(success=True)
        return True

    async def _run(self, run_now: bool) -> None:
        if not run_now:
            await asyncio.sleep(self.interval)

        while True:
            await self.run_once()
            await asyncio.sleep(self.interval)
