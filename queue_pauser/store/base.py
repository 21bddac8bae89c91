"""Abstract shared store for the paused queue set.

The shared store is the single source of truth for which queues are
paused. Every process reads and writes the same set; there is no locking
across processes, so concurrent pause/resume of one queue resolves to
whichever write lands last.
"""

from abc import ABC, abstractmethod


class PausedQueueStore(ABC):
    """Durable set of paused queue names, in normalized form.

    Implementations raise ``StoreUnavailableError`` when the backend
    cannot serve a request.
    """

    @abstractmethod
    async def add(self, queue: str) -> None:
        """Add a queue to the paused set. Adding an existing member is a no-op."""

    @abstractmethod
    async def remove(self, queue: str) -> None:
        """Remove a queue from the paused set. Removing a missing member is a no-op."""

    @abstractmethod
    async def contains(self, queue: str) -> bool:
        """Check whether a queue is in the paused set."""

    @abstractmethod
    async def members(self) -> set[str]:
        """Return every queue in the paused set."""

    async def ping(self) -> bool:
        """Check that the backend is reachable."""
        return True
