"""
Unit tests for broadcasting.
"""

import asyncio

import pytest

from queue_pauser.broadcast.local import LocalBroadcaster, LocalChannel
from queue_pauser.constants import LifecyclePhase, MessageKind
from queue_pauser.lifecycle import ProcessLifecycle
from queue_pauser.types.events import BroadcastMessage


class TestBroadcastMessage:
    """Tests for the wire message."""

    def test_decode(self):
        """Test decoding a message from JSON."""
        message = BroadcastMessage.decode('{"kind": "pause", "payload": "default"}')

        assert message.kind == MessageKind.PAUSE
        assert message.payload == "default"

    def test_decode_bytes(self):
        """Test decoding raw bytes as read from a socket."""
        message = BroadcastMessage.decode(b'{"kind": "resume", "payload": "low"}')

        assert message.kind == "resume"

    def test_decode_rejects_missing_kind(self):
        """Test that messages without a kind are invalid."""
        with pytest.raises(ValueError):
            BroadcastMessage.decode('{"payload": "default"}')


class TestLocalBroadcaster:
    """Tests for LocalBroadcaster dispatching."""

    async def test_transmit_reaches_all_subscribers(self, channel: LocalChannel):
        """Test every subscribed broadcaster receives a message."""
        received: list[tuple[str, str]] = []
        broadcasters = [LocalBroadcaster(channel) for _ in range(3)]

        for index, broadcaster in enumerate(broadcasters):
            broadcaster.receive(MessageKind.PAUSE, lambda q, i=index: received.append((str(i), q)))
            await broadcaster.start()

        await broadcasters[0].transmit(MessageKind.PAUSE, "default")

        assert sorted(received) == [("0", "default"), ("1", "default"), ("2", "default")]

    async def test_handlers_only_for_their_kind(self, channel: LocalChannel):
        """Test handlers are selected by message kind."""
        paused: list[str] = []
        resumed: list[str] = []
        broadcaster = LocalBroadcaster(channel)
        broadcaster.receive(MessageKind.PAUSE, paused.append)
        broadcaster.receive(MessageKind.RESUME, resumed.append)
        await broadcaster.start()

        await broadcaster.transmit(MessageKind.RESUME, "low")

        assert paused == []
        assert resumed == ["low"]

    async def test_async_handler(self, channel: LocalChannel):
        """Test coroutine handlers are awaited."""
        received: list[str] = []

        async def handler(queue: str) -> None:
            await asyncio.sleep(0)
            received.append(queue)

        broadcaster = LocalBroadcaster(channel)
        broadcaster.receive(MessageKind.PAUSE, handler)
        await broadcaster.start()

        await broadcaster.transmit(MessageKind.PAUSE, "default")

        assert received == ["default"]

    async def test_failing_handler_is_isolated(self, channel: LocalChannel):
        """Test a raising handler does not stop the others or later messages."""
        received: list[str] = []

        def broken(queue: str) -> None:
            raise RuntimeError("boom")

        broadcaster = LocalBroadcaster(channel)
        broadcaster.receive(MessageKind.PAUSE, broken)
        broadcaster.receive(MessageKind.PAUSE, received.append)
        await broadcaster.start()

        await broadcaster.transmit(MessageKind.PAUSE, "a")
        await broadcaster.transmit(MessageKind.PAUSE, "b")

        assert received == ["a", "b"]

    async def test_undecodable_message_dropped(self, channel: LocalChannel):
        """Test garbage on the channel is ignored."""
        received: list[str] = []
        broadcaster = LocalBroadcaster(channel)
        broadcaster.receive(MessageKind.PAUSE, received.append)
        await broadcaster.start()

        await channel.publish("not json")
        await channel.publish('{"kind": "unknown", "payload": "x"}')

        assert received == []

    async def test_unsubscribed_broadcaster_misses_messages(self, channel: LocalChannel):
        """Test delivery only reaches current subscribers."""
        received: list[str] = []
        sender = LocalBroadcaster(channel)
        receiver = LocalBroadcaster(channel)
        receiver.receive(MessageKind.PAUSE, received.append)
        await sender.start()

        await sender.transmit(MessageKind.PAUSE, "early")
        await receiver.start()
        await sender.transmit(MessageKind.PAUSE, "late")
        await receiver.stop()
        await sender.transmit(MessageKind.PAUSE, "gone")

        assert received == ["late"]


class TestReadyHandshake:
    """Tests for the ready callback."""

    async def test_ready_fires_once(self, channel: LocalChannel):
        """Test ready callbacks run once even across restarts."""
        calls: list[int] = []
        broadcaster = LocalBroadcaster(channel)
        broadcaster.ready(lambda: calls.append(1))

        await broadcaster.start()
        await broadcaster.stop()
        await broadcaster.start()

        assert calls == [1]
        assert broadcaster.is_ready

    async def test_ready_not_fired_before_start(self, channel: LocalChannel):
        """Test ready waits for the subscription."""
        calls: list[int] = []
        broadcaster = LocalBroadcaster(channel)
        broadcaster.ready(lambda: calls.append(1))

        assert calls == []
        assert not broadcaster.is_ready

    async def test_late_ready_callback_runs(self, channel: LocalChannel):
        """Test a callback registered after readiness still runs."""
        called = asyncio.Event()
        broadcaster = LocalBroadcaster(channel)
        await broadcaster.start()

        broadcaster.ready(called.set)

        await asyncio.wait_for(called.wait(), timeout=1)

    async def test_failing_ready_callback_is_logged(self, channel: LocalChannel):
        """Test one failing ready callback does not skip the next."""
        calls: list[str] = []

        def broken() -> None:
            raise RuntimeError("boom")

        broadcaster = LocalBroadcaster(channel)
        broadcaster.ready(broken)
        broadcaster.ready(lambda: calls.append("ok"))

        await broadcaster.start()

        assert calls == ["ok"]

    async def test_attach_to_lifecycle(self, channel: LocalChannel):
        """Test the broadcaster subscribes on start and leaves on stop."""
        lifecycle = ProcessLifecycle()
        broadcaster = LocalBroadcaster(channel)
        broadcaster.attach(lifecycle)

        await lifecycle.advance(LifecyclePhase.STARTING)
        assert channel.subscriber_count == 1

        await lifecycle.advance(LifecyclePhase.STOPPED)
        assert channel.subscriber_count == 0
