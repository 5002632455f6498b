"""Realtime delivery of comment events."""

from .broadcaster import RecordingEventSink, WebSocketBroadcaster

__all__ = ["RecordingEventSink", "WebSocketBroadcaster"]
