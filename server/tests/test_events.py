"""Tests for the parser failure channel."""
from core.events import MAX_DETAIL_CHARS, FailureChannel
from integrations.gemini.client import GeminiClient


class TestFailureChannel:
    def test_report_records_event(self):
        channel = FailureChannel()
        event = channel.report("network", status=502, detail="bad gateway")
        assert channel.recent() == [event]
        assert event.status == 502
        assert event.occurred_at.tzinfo is not None

    def test_detail_truncated(self):
        channel = FailureChannel()
        event = channel.report("decode", detail="x" * 5000)
        assert len(event.detail) == MAX_DETAIL_CHARS

    def test_bounded_oldest_dropped(self):
        channel = FailureChannel(max_events=2)
        for code in ("a", "b", "c"):
            channel.report("validation", code=code)
        assert [e.code for e in channel.recent()] == ["b", "c"]

    def test_recent_limit(self):
        channel = FailureChannel()
        for code in ("a", "b", "c"):
            channel.report("decode", code=code)
        assert [e.code for e in channel.recent(1)] == ["c"]
        assert channel.recent(0) == []

    def test_clear(self):
        channel = FailureChannel()
        channel.report("network")
        channel.clear()
        assert len(channel) == 0

    def test_empty_channel_is_shared_not_replaced(self):
        channel = FailureChannel()
        assert GeminiClient(failures=channel).failures is channel
