"""Domain event notification."""

from typing import Any

import logfire

from discuss.domain.value import EventKind, VoteKind

from .base import Service


class EventSink:
    """Generic interface for delivering comment events to listeners."""

    async def publish(self, topic: str, payload: dict[str, Any]) -> None:
        """Deliver an event to every listener.

        Args:
            topic: Event topic, e.g. "comment:created"
            payload: JSON-serializable event data
        """
        raise NotImplementedError


def topic_for(kind: EventKind, vote: VoteKind | None = None) -> str:
    """Map an event kind onto its broadcast topic.

    Votes are published as comment:liked or comment:disliked.
    """
    if kind is EventKind.VOTED:
        if vote is None:
            raise ValueError("Vote events require a vote kind")
        return "comment:liked" if vote is VoteKind.LIKE else "comment:disliked"
    return f"comment:{kind.value}"


class EventNotifier(Service):
    """Emits comment events after mutations have been applied.

    Delivery is fire-and-forget: a failing sink is logged and never fails
    the mutation that triggered the event.
    """

    def __init__(self, sink: EventSink) -> None:
        """Initialize event notifier.

        Args:
            sink: Transport that delivers events to listeners
        """
        self.sink = sink

    async def notify(
        self,
        kind: EventKind,
        payload: dict[str, Any],
        vote: VoteKind | None = None,
    ) -> None:
        """Emit an event.

        Args:
            kind: What happened
            payload: Enriched comment, or {"id": ...} for deletions
            vote: Vote kind, required for EventKind.VOTED
        """
        topic = topic_for(kind, vote)
        try:
            await self.sink.publish(topic, payload)
            logfire.debug("Event published", topic=topic)
        except Exception as e:
            logfire.error("Event delivery failed", topic=topic, error=str(e))
