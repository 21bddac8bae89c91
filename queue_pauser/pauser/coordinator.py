"""
Pause coordinator.

One coordinator per process answers "is this queue paused" for the job
fetch path and mutates the global pause state for operators.

State lives in three places:
- the shared store, the source of truth;
- broadcast messages, which push every change to all live processes;
- the local cache, a set of expanded queue names read by ``filter``.

The cache is fed by broadcast handlers, by the ready handshake and by the
resync watcher. All of them go through one lock, and a resync replaces the
whole set at once, so ``filter`` always sees a complete snapshot.
"""

import logging
import threading
from collections.abc import Sequence

from queue_pauser.broadcast.base import Broadcaster
from queue_pauser.constants import (
    DEFAULT_RESYNC_INTERVAL_SECONDS,
    SPAN_PAUSE_QUEUE,
    SPAN_RESUME_QUEUE,
    LifecyclePhase,
    MessageKind,
)
from queue_pauser.errors import InvalidQueueNameError
from queue_pauser.lifecycle import ProcessLifecycle
from queue_pauser.observability.metrics import get_metrics
from queue_pauser.observability.tracing import get_tracer
from queue_pauser.pauser.names import QueueNameCodec
from queue_pauser.pauser.watcher import ResyncWatcher
from queue_pauser.store.base import PausedQueueStore

logger = logging.getLogger(__name__)


class PauseCoordinator:
    """
    Per-process authority on paused queues.

    ``filter`` is the hot path: it never performs I/O and never raises.
    ``pause``, ``resume``, ``is_paused`` and ``list_paused`` talk to the
    shared store directly and propagate its errors.

    When disabled, every operation is a no-op: ``filter`` passes its input
    through, status checks report nothing paused.
    """

    def __init__(
        self,
        store: PausedQueueStore,
        broadcaster: Broadcaster,
        codec: QueueNameCodec | None = None,
        enabled: bool = True,
        resync_interval_seconds: float = DEFAULT_RESYNC_INTERVAL_SECONDS,
    ):
        """
        Initialize the coordinator.

        Args:
            store: Shared store holding the paused queue set.
            broadcaster: Channel used to notify all processes of changes.
            codec: Queue name codec. Defaults to the ``queue:`` prefix.
            enabled: Whether queue pausing is turned on for this process.
            resync_interval_seconds: Seconds between full resyncs.
        """
        self._store = store
        self._broadcaster = broadcaster
        self._codec = codec or QueueNameCodec()
        self._enabled = enabled
        self._resync_interval = resync_interval_seconds

        self._paused_queues: set[str] = set()
        self._lock = threading.Lock()
        self._watcher: ResyncWatcher | None = None
        self._configured = False
        self._metrics = get_metrics()

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def store(self) -> PausedQueueStore:
        return self._store

    @property
    def broadcaster(self) -> Broadcaster:
        return self._broadcaster

    @property
    def codec(self) -> QueueNameCodec:
        return self._codec

    @property
    def watcher(self) -> ResyncWatcher | None:
        return self._watcher

    def setup(self, lifecycle: ProcessLifecycle | None = None) -> None:
        """
        Wire the coordinator into the broadcaster and the process lifecycle.

        Pause and resume messages update the local cache, the ready
        handshake triggers a first full sync, and the resync watcher runs
        from startup until the process quiesces.
        """
        if not self._enabled:
            logger.info("Queue pausing disabled")
            return

        if self._configured:
            return
        self._configured = True

        self._broadcaster.receive(MessageKind.PAUSE, self._add)
        self._broadcaster.receive(MessageKind.RESUME, self._delete)
        self._broadcaster.ready(self.sync)

        if lifecycle is not None:
            lifecycle.on(LifecyclePhase.STARTING, self.start_watcher)
            lifecycle.on(LifecyclePhase.QUIESCING, self.stop_watcher)

    def filter(self, queues: Sequence[str]) -> Sequence[str]:
        """
        Strip paused queues from ``queues``, keeping the order of the rest.

        Queue names may be given in normalized or expanded form.
        """
        if not self._enabled:
            return queues

        try:
            with self._lock:
                return [queue for queue in queues if not self._is_cached(queue)]
        except Exception as e:
            self._metrics.record_filter_failure()
            logger.error(f"Failed to filter queues: {e}")
            return queues

    def cached_paused_queues(self) -> frozenset[str]:
        """Snapshot of the local cache, in expanded form."""
        with self._lock:
            return frozenset(self._paused_queues)

    async def list_paused(self) -> set[str]:
        """Return the normalized names of all paused queues from the shared store."""
        if not self._enabled:
            return set()

        return await self._store.members()

    async def is_paused(self, queue: str) -> bool:
        """Check the shared store for whether ``queue`` is paused."""
        if not self._enabled:
            return False

        name = self._codec.normalize(queue)
        return await self._store.contains(name)

    async def pause(self, queue: str) -> None:
        """
        Pause ``queue`` in every process.

        Adds the queue to the shared store and broadcasts the change. Pausing
        a paused queue leaves the store as is and broadcasts again.
        """
        if not self._enabled:
            return

        name = self._codec.normalize(queue)

        with get_tracer().start_as_current_span(SPAN_PAUSE_QUEUE) as span:
            span.set_attribute("queue", name)
            await self._store.add(name)
            await self._broadcaster.transmit(MessageKind.PAUSE, name)

        self._metrics.record_pause_operation(MessageKind.PAUSE)
        logger.info("Queue paused", extra={"queue": name})

    async def resume(self, queue: str) -> None:
        """Resume ``queue`` in every process."""
        if not self._enabled:
            return

        name = self._codec.normalize(queue)

        with get_tracer().start_as_current_span(SPAN_RESUME_QUEUE) as span:
            span.set_attribute("queue", name)
            await self._store.remove(name)
            await self._broadcaster.transmit(MessageKind.RESUME, name)

        self._metrics.record_pause_operation(MessageKind.RESUME)
        logger.info("Queue resumed", extra={"queue": name})

    async def sync(self) -> None:
        """
        Replace the local cache with the paused set from the shared store.

        Raises whatever the store raises; the cache is left untouched then.
        """
        if not self._enabled:
            return

        members = await self._store.members()

        expanded = set()
        for member in members:
            try:
                expanded.add(self._codec.expand(member))
            except InvalidQueueNameError:
                logger.warning("Skipped invalid paused queue name", extra={"queue": member})

        with self._lock:
            self._paused_queues = expanded
            size = len(self._paused_queues)

        self._metrics.update_local_paused_queues(size)
        logger.debug("Paused queues synced", extra={"paused": size})

    async def start_watcher(self) -> None:
        """
        Start the resync watcher once; later calls are no-ops.

        The first resync is awaited before this returns, so a process does
        not fetch work with an empty cache. If the store is down that first
        run is logged and the timer retries on its next tick.
        """
        if not self._enabled:
            return

        with self._lock:
            if self._watcher is not None:
                return
            watcher = self._watcher = ResyncWatcher(self.sync, self._resync_interval)

        await watcher.run_once()

        with self._lock:
            # stopped while the first sync was in flight
            if self._watcher is not watcher:
                return
            watcher.start(run_now=False)

    async def stop_watcher(self) -> None:
        """Stop the resync watcher if it runs."""
        with self._lock:
            watcher, self._watcher = self._watcher, None

        if watcher is not None:
            await watcher.stop()

    def _is_cached(self, queue: str) -> bool:
        try:
            return self._codec.expand(queue) in self._paused_queues
        except InvalidQueueNameError:
            return False

    def _add(self, queue: str) -> None:
        expanded = self._codec.expand(queue)
        with self._lock:
            self._paused_queues.add(expanded)
            size = len(self._paused_queues)
        self._metrics.update_local_paused_queues(size)

    def _delete(self, queue: str) -> None:
        expanded = self._codec.expand(queue)
        with self._lock:
            self._paused_queues.discard(expanded)
            size = len(self._paused_queues)
        self._metrics.update_local_paused_queues(size)
