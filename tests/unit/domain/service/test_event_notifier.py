"""Unit tests for EventNotifier."""

import pytest

from discuss.adapter.realtime import RecordingEventSink
from discuss.domain.service import EventNotifier, topic_for
from discuss.domain.value import EventKind, VoteKind


class TestTopicFor:
    """Tests for topic_for()."""

    @pytest.mark.parametrize(
        "kind,expected",
        [
            (EventKind.CREATED, "comment:created"),
            (EventKind.UPDATED, "comment:updated"),
            (EventKind.DELETED, "comment:deleted"),
        ],
    )
    def test_mutation_topics(self, kind, expected):
        assert topic_for(kind) == expected

    def test_vote_topics(self):
        assert topic_for(EventKind.VOTED, VoteKind.LIKE) == "comment:liked"
        assert topic_for(EventKind.VOTED, VoteKind.DISLIKE) == "comment:disliked"

    def test_vote_without_kind_is_rejected(self):
        with pytest.raises(ValueError):
            topic_for(EventKind.VOTED)


class TestNotify:
    """Tests for notify()."""

    @pytest.mark.asyncio
    async def test_event_is_published_to_sink(self):
        """The payload is forwarded under its topic."""
        sink = RecordingEventSink()
        notifier = EventNotifier(sink)

        await notifier.notify(EventKind.DELETED, {"id": "abc"})

        assert sink.events == [("comment:deleted", {"id": "abc"})]

    @pytest.mark.asyncio
    async def test_failing_sink_does_not_raise(self):
        """Delivery errors are logged, never propagated."""
        sink = RecordingEventSink(fail=True)
        notifier = EventNotifier(sink)

        # Should not raise
        await notifier.notify(EventKind.VOTED, {"id": "abc"}, vote=VoteKind.LIKE)

        assert sink.events == []
