"""Unit tests for WebSocketBroadcaster."""

import asyncio

import pytest

from discuss.adapter.realtime import WebSocketBroadcaster


class FakeWebSocket:
    def __init__(self, fail: bool = False):
        self.accepted = False
        self.sent = []
        self.fail = fail
        self.close_code = None

    async def accept(self):
        self.accepted = True

    async def send_json(self, data):
        if self.fail:
            raise RuntimeError("connection closed")
        self.sent.append(data)

    async def close(self, code=1000):
        self.close_code = code


class TestWebSocketBroadcaster:
    """Tests for WebSocketBroadcaster."""

    @pytest.mark.asyncio
    async def test_publish_reaches_every_connection(self):
        broadcaster = WebSocketBroadcaster()
        first, second = FakeWebSocket(), FakeWebSocket()
        await broadcaster.connect(first)
        await broadcaster.connect(second)

        await broadcaster.publish("comment:created", {"id": "abc"})

        assert first.accepted and second.accepted
        expected = {"event": "comment:created", "data": {"id": "abc"}}
        assert first.sent == [expected]
        assert second.sent == [expected]

    @pytest.mark.asyncio
    async def test_failing_connection_is_dropped(self):
        broadcaster = WebSocketBroadcaster()
        healthy, broken = FakeWebSocket(), FakeWebSocket(fail=True)
        await broadcaster.connect(healthy)
        await broadcaster.connect(broken)

        await broadcaster.publish("comment:deleted", {"id": "abc"})

        assert broadcaster.active_connections == [healthy]
        assert len(healthy.sent) == 1

    @pytest.mark.asyncio
    async def test_disconnect_unknown_connection(self):
        broadcaster = WebSocketBroadcaster()

        # Should not raise
        broadcaster.disconnect(FakeWebSocket())

        assert broadcaster.active_connections == []

    @pytest.mark.asyncio
    async def test_publish_without_listeners(self):
        broadcaster = WebSocketBroadcaster()

        # Should not raise
        await broadcaster.publish("comment:liked", {"id": "abc"})

    @pytest.mark.asyncio
    async def test_close_sends_going_away_to_every_connection(self):
        broadcaster = WebSocketBroadcaster()
        first, second = FakeWebSocket(), FakeWebSocket()
        await broadcaster.connect(first)
        await broadcaster.connect(second)

        await broadcaster.close()

        assert first.close_code == 1001
        assert second.close_code == 1001
        assert broadcaster.active_connections == []

    @pytest.mark.asyncio
    async def test_stalled_connection_is_dropped_after_timeout(self):
        broadcaster = WebSocketBroadcaster(send_timeout=0.01)
        healthy, stalled = FakeWebSocket(), StalledWebSocket()
        await broadcaster.connect(stalled)
        await broadcaster.connect(healthy)

        await broadcaster.publish("comment:updated", {"id": "abc"})

        assert broadcaster.active_connections == [healthy]
        assert healthy.sent == [{"event": "comment:updated", "data": {"id": "abc"}}]
        assert stalled.cancelled

    @pytest.mark.asyncio
    async def test_sends_run_concurrently(self):
        broadcaster = WebSocketBroadcaster(send_timeout=1.0)
        first, second = GatedWebSocket(), GatedWebSocket()
        first.partner, second.partner = second, first
        await broadcaster.connect(first)
        await broadcaster.connect(second)

        # Each send waits for the other to start, so a sequential loop would
        # time out both connections
        await broadcaster.publish("comment:created", {"id": "abc"})

        assert broadcaster.active_connections == [first, second]
        assert len(first.sent) == 1
        assert len(second.sent) == 1


class StalledWebSocket(FakeWebSocket):
    def __init__(self):
        super().__init__()
        self.cancelled = False

    async def send_json(self, data):
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            self.cancelled = True
            raise


class GatedWebSocket(FakeWebSocket):
    def __init__(self):
        super().__init__()
        self.started = asyncio.Event()
        self.partner = None

    async def send_json(self, data):
        self.started.set()
        await self.partner.started.wait()
        self.sent.append(data)
