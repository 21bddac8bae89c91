"""
Broadcaster base class.

A broadcaster fans messages out to every live process. Delivery is best
effort: a message published while a process is disconnected or not yet
subscribed is simply missed. Anything that must converge has to be
reconciled by other means.
"""

import asyncio
import inspect
import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from collections.abc import Awaitable, Callable

from pydantic import ValidationError

from queue_pauser.constants import LifecyclePhase
from queue_pauser.lifecycle import ProcessLifecycle
from queue_pauser.observability.metrics import get_metrics
from queue_pauser.types.events import BroadcastMessage

logger = logging.getLogger(__name__)

MessageHandler = Callable[[str], Awaitable[None] | None]
ReadyCallback = Callable[[], Awaitable[None] | None]


class Broadcaster(ABC):
    """
    Publish/subscribe channel with a per-process dispatcher.

    Subclasses provide the transport (``start``, ``stop``, ``_publish``) and
    feed every raw inbound message to ``_dispatch``. They call
    ``_fire_ready`` once the subscription is confirmed.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[MessageHandler]] = defaultdict(list)
        self._ready_callbacks: list[ReadyCallback] = []
        self._is_ready = False
        self._background: set[asyncio.Task] = set()
        self._metrics = get_metrics()

    @property
    def is_ready(self) -> bool:
        return self._is_ready

    def receive(self, kind: str, handler: MessageHandler) -> None:
        """
        Register a handler for messages of ``kind``.

        Handlers stay registered for the lifetime of the broadcaster and are
        called with the message payload.
        """
        self._handlers[str(kind)].append(handler)

    def ready(self, callback: ReadyCallback) -> None:
        """
        Register a callback to run once the subscription is established.

        A callback registered after that moment is scheduled right away.
        """
        if not self._is_ready:
            self._ready_callbacks.append(callback)
            return

        task = asyncio.get_running_loop().create_task(self._run_ready_callback(callback))
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def transmit(self, kind: str, payload: str) -> None:
        """
        Publish a message to all subscribers, including this process.

        Fire-and-forget: returns once the message is handed to the transport.

        Raises:
            BroadcastError: If the transport rejects the message.
        """
        message = BroadcastMessage(kind=str(kind), payload=payload)
        await self._publish(message.encode())

    def attach(self, lifecycle: ProcessLifecycle) -> None:
        """Subscribe when the process starts and unsubscribe once it stops."""
        lifecycle.on(LifecyclePhase.STARTING, self.start)
        lifecycle.on(LifecyclePhase.STOPPED, self.stop)

    @abstractmethod
    async def start(self) -> None:
        """Subscribe to the channel and start dispatching messages."""

    @abstractmethod
    async def stop(self) -> None:
        """Unsubscribe from the channel."""

    @abstractmethod
    async def _publish(self, data: str) -> None:
        """Hand an encoded message to the transport."""

    async def _dispatch(self, data: str | bytes) -> None:
        """Decode an inbound message and run its handlers; never raises."""
        try:
            message = BroadcastMessage.decode(data)
        except ValidationError:
            logger.warning("Dropped undecodable broadcast message", extra={"data": repr(data)})
            return

        handlers = self._handlers.get(message.kind)
        if not handlers:
            logger.debug("No handlers for broadcast message", extra={"kind": message.kind})
            return

        self._metrics.record_message_received(message.kind)

        for handler in handlers:
            try:
                result = handler(message.payload)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                self._metrics.record_message_failure(message.kind)
                logger.exception(
                    "Broadcast handler failed",
                    extra={"kind": message.kind, "payload": message.payload},
                )

    async def _fire_ready(self) -> None:
        """Run the ready callbacks; later calls are no-ops."""
        if self._is_ready:
            return

        self._is_ready = True
        callbacks, self._ready_callbacks = self._ready_callbacks, []
        for callback in callbacks:
            await self._run_ready_callback(callback)

    async def _run_ready_callback(self, callback: ReadyCallback) -> None:
        try:
            result = callback()
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception("Broadcaster ready callback failed")
