"""In-process broadcaster.

Broadcasters attached to the same ``LocalChannel`` behave like processes
subscribed to one pub/sub channel. Delivery is awaited inline, in
subscription order.
"""

import logging

from queue_pauser.broadcast.base import Broadcaster

logger = logging.getLogger(__name__)


class LocalChannel:
    """Fan-out hub shared by local broadcasters."""

    def __init__(self) -> None:
        self._subscribers: list["LocalBroadcaster"] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, broadcaster: "LocalBroadcaster") -> None:
        if broadcaster not in self._subscribers:
            self._subscribers.append(broadcaster)

    def unsubscribe(self, broadcaster: "LocalBroadcaster") -> None:
        if broadcaster in self._subscribers:
            self._subscribers.remove(broadcaster)

    async def publish(self, data: str) -> int:
        """Deliver ``data`` to every subscriber; returns the number reached."""
        subscribers = list(self._subscribers)
        for subscriber in subscribers:
            await subscriber._dispatch(data)
        return len(subscribers)


class LocalBroadcaster(Broadcaster):
    """Broadcaster bound to an in-process channel."""

    def __init__(self, channel: LocalChannel | None = None) -> None:
        super().__init__()
        self._channel = channel or LocalChannel()

    @property
    def channel(self) -> LocalChannel:
        return self._channel

    async def start(self) -> None:
        self._channel.subscribe(self)
        await self._fire_ready()

    async def stop(self) -> None:
        self._channel.unsubscribe(self)

    async def _publish(self, data: str) -> None:
        delivered = await self._channel.publish(data)
        logger.debug("Local broadcast delivered", extra={"subscribers": delivered})
