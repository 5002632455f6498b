"""Realtime infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide

from discuss.adapter.realtime import WebSocketBroadcaster
from discuss.config import Settings
from discuss.domain.service import EventSink
from discuss.util.di.base import ProviderBase


class RealtimeProvider(ProviderBase):
    """Realtime component base."""

    __mock_component__ = "realtime"


class ProdRealtimeProvider(RealtimeProvider):
    """Production realtime provider broadcasting over WebSockets.

    The broadcaster is APP-scoped: every request publishes to the same set
    of open connections.
    """

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_broadcaster(
        self, settings: Settings
    ) -> AsyncIterator[WebSocketBroadcaster]:
        """Provide the WebSocket broadcaster; open sockets close with the container."""
        broadcaster = WebSocketBroadcaster(send_timeout=settings.realtime.send_timeout)
        yield broadcaster
        await broadcaster.close()

    @provide(scope=Scope.APP)
    def get_event_sink(self, broadcaster: WebSocketBroadcaster) -> EventSink:
        """Provide the broadcaster as the event sink."""
        return broadcaster
