"""In-process paused queue store.

Serves single-process deployments and tests. State lives only as long as
the process, so every coordinator sharing it must run in the same process.
"""

import threading

from queue_pauser.store.base import PausedQueueStore


class InMemoryPausedQueueStore(PausedQueueStore):
    """Paused queue set held in a Python set."""

    def __init__(self, initial: set[str] | None = None) -> None:
        self._queues: set[str] = set(initial or ())
        self._lock = threading.Lock()

    async def add(self, queue: str) -> None:
        with self._lock:
            self._queues.add(queue)

    async def remove(self, queue: str) -> None:
        with self._lock:
            self._queues.discard(queue)

    async def contains(self, queue: str) -> bool:
        with self._lock:
            return queue in self._queues

    async def members(self) -> set[str]:
        with self._lock:
            return set(self._queues)
