"""
Process lifecycle phases.

Components register callbacks for the phase they care about instead of
relying on the order in which startup hooks happen to be installed.
"""

import inspect
import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable

from queue_pauser.constants import LIFECYCLE_ORDER, LifecyclePhase
from queue_pauser.errors import LifecycleError

logger = logging.getLogger(__name__)

LifecycleCallback = Callable[[], Awaitable[None] | None]


class ProcessLifecycle:
    """
    Ordered lifecycle of a worker or API process.

    Phases only move forward. Advancing past several phases at once runs the
    callbacks of each skipped phase in order, so a process that goes straight
    from RUNNING to STOPPED still quiesces first.
    """

    def __init__(self) -> None:
        self._callbacks: dict[LifecyclePhase, list[LifecycleCallback]] = defaultdict(list)
        self._phase: LifecyclePhase | None = None

    @property
    def phase(self) -> LifecyclePhase | None:
        """Current phase, or None before the process started."""
        return self._phase

    def on(self, phase: LifecyclePhase, callback: LifecycleCallback) -> None:
        """
        Register a callback for a phase.

        Args:
            phase: Phase that triggers the callback.
            callback: Sync or async callable taking no arguments.
        """
        self._callbacks[phase].append(callback)

    async def advance(self, phase: LifecyclePhase) -> None:
        """
        Move the process to ``phase``.

        Raises:
            LifecycleError: If ``phase`` is not ahead of the current phase.
        """
        target = LIFECYCLE_ORDER.index(phase)
        current = -1 if self._phase is None else LIFECYCLE_ORDER.index(self._phase)

        if target <= current:
            raise LifecycleError(
                f"Cannot move from {self._phase} to {phase}"
            )

        for step in LIFECYCLE_ORDER[current + 1 : target + 1]:
            self._phase = step
            logger.info("Lifecycle phase changed", extra={"phase": str(step)})
            await self._run_callbacks(step)

    async def _run_callbacks(self, phase: LifecyclePhase) -> None:
        for callback in self._callbacks.get(phase, []):
            try:
                result = callback()
                if inspect.isawaitable(result):
                    await result
            except Exception:
                if phase == LifecyclePhase.STARTING:
                    raise
                logger.exception(
                    "Lifecycle callback failed",
                    extra={"phase": str(phase)},
                )
