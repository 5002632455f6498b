"""WebSocket fan-out for comment events."""

import asyncio
from typing import Any

import logfire
from fastapi import WebSocket, status

from discuss.adapter.error import DeliveryError
from discuss.domain.service import EventSink


class WebSocketBroadcaster(EventSink):
    """Broadcasts every comment event to all connected WebSocket clients.

    Messages are sent as {"event": topic, "data": payload}. All connections
    are sent to concurrently; a connection that fails or doesn't accept the
    message within send_timeout seconds is dropped.
    """

    def __init__(self, send_timeout: float = 5.0) -> None:
        self.active_connections: list[WebSocket] = []
        self.send_timeout = send_timeout

    async def connect(self, websocket: WebSocket) -> None:
        """Accept and register a WebSocket connection."""
        await websocket.accept()
        self.active_connections.append(websocket)
        logfire.info(
            "WebSocket connected", connections=len(self.active_connections)
        )

    def disconnect(self, websocket: WebSocket) -> None:
        """Remove a WebSocket connection."""
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)
        logfire.info(
            "WebSocket disconnected", connections=len(self.active_connections)
        )

    async def close(self) -> None:
        """Close every open connection with 1001 (going away)."""
        connections = list(self.active_connections)
        self.active_connections.clear()
        for connection in connections:
            try:
                await connection.close(code=status.WS_1001_GOING_AWAY)
            except Exception as e:
                logfire.warn("WebSocket close failed", error=str(e))
        logfire.info("WebSocket broadcaster closed", closed=len(connections))

    async def publish(self, topic: str, payload: dict[str, Any]) -> None:
        """Send an event to every open connection."""
        message = {"event": topic, "data": payload}
        connections = list(self.active_connections)
        results = await asyncio.gather(
            *(self._send(connection, message) for connection in connections)
        )

        for connection, delivered in zip(connections, results):
            if not delivered:
                self.disconnect(connection)

    async def _send(self, connection: WebSocket, message: dict[str, Any]) -> bool:
        try:
            await asyncio.wait_for(
                connection.send_json(message), timeout=self.send_timeout
            )
            return True
        except Exception as e:
            logfire.warn(
                "WebSocket send failed",
                topic=message["event"],
                error=str(e) or type(e).__name__,
            )
            return False


class RecordingEventSink(EventSink):
    """Event sink that keeps published events in memory.

    Used in tests and wherever no live listeners are attached. Set
    fail=True to simulate a broken transport.
    """

    def __init__(self, fail: bool = False) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []
        self.fail = fail

    async def publish(self, topic: str, payload: dict[str, Any]) -> None:
        if self.fail:
            raise DeliveryError(f"Cannot deliver {topic}")
        self.events.append((topic, payload))

    def topics(self) -> list[str]:
        """Topics of all recorded events, in publish order."""
        return [topic for topic, _ in self.events]
