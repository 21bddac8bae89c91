"""Redis pub/sub broadcaster.

All message kinds share one channel; the kind travels inside the JSON
message. A single listener task per process reads the channel and
dispatches messages in arrival order.
"""

import asyncio
import logging

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from queue_pauser.broadcast.base import Broadcaster
from queue_pauser.constants import DEFAULT_CHANNEL, DEFAULT_RECONNECT_DELAY_SECONDS
from queue_pauser.errors import BroadcastError

logger = logging.getLogger(__name__)


class RedisBroadcaster(Broadcaster):
    """
    Broadcaster over a Redis pub/sub channel.

    The listener reconnects after connection loss. Messages published while
    it is disconnected are lost.
    """

    def __init__(
        self,
        redis: aioredis.Redis,
        channel: str = DEFAULT_CHANNEL,
        reconnect_delay: float = DEFAULT_RECONNECT_DELAY_SECONDS,
        poll_timeout: float = 1.0,
    ) -> None:
        """
        Initialize the broadcaster.

        Args:
            redis: Async Redis client.
            channel: Pub/sub channel name.
            reconnect_delay: Seconds to wait before resubscribing after an error.
            poll_timeout: Seconds to block waiting for a message per read.
        """
        super().__init__()
        self._redis = redis
        self._channel = channel
        self._reconnect_delay = reconnect_delay
        self._poll_timeout = poll_timeout
        self._running = False
        self._listener_task: asyncio.Task | None = None

    @property
    def channel(self) -> str:
        return self._channel

    async def start(self) -> None:
        if self._listener_task is not None:
            return

        self._running = True
        self._listener_task = asyncio.create_task(self._listen())
        logger.info("Broadcaster listener started", extra={"channel": self._channel})

    async def stop(self) -> None:
        self._running = False

        if self._listener_task is None:
            return

        self._listener_task.cancel()
        try:
            await self._listener_task
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.exception(
                "Broadcaster listener had died",
                extra={"channel": self._channel},
            )
        self._listener_task = None
        logger.info("Broadcaster listener stopped", extra={"channel": self._channel})

    async def _publish(self, data: str) -> None:
        try:
            await self._redis.publish(self._channel, data)
        except RedisError as e:
            raise BroadcastError(f"Failed to publish to {self._channel}: {e}") from e

    async def _listen(self) -> None:
        """Subscribe and dispatch until stopped, resubscribing on errors."""
        while self._running:
            pubsub = self._redis.pubsub()
            try:
                await pubsub.subscribe(self._channel)

                while self._running:
                    message = await pubsub.get_message(timeout=self._poll_timeout)
                    if message is None:
                        continue

                    if message["type"] == "subscribe":
                        await self._fire_ready()
                    elif message["type"] == "message":
                        await self._dispatch(message["data"])

            except (RedisError, OSError) as e:
                logger.warning(
                    f"Broadcaster connection lost: {e}",
                    extra={"channel": self._channel},
                )
                await asyncio.sleep(self._reconnect_delay)
            except Exception:
                # e.g. UnicodeDecodeError on a non-UTF-8 publish
                logger.exception(
                    "Broadcaster listener failed, resubscribing",
                    extra={"channel": self._channel},
                )
                await asyncio.sleep(self._reconnect_delay)
            finally:
                try:
                    await pubsub.aclose()
                except (RedisError, OSError):
                    pass
