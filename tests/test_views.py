"""
tests/test_views.py
===================
Inbox filter / sort, transcripts, open and unread indicators, stats.
"""

import pytest

from models import Message
from profiles import generate_profile
from views import (
    conversation_transcript,
    filter_inbox,
    has_open_messages,
    message_stats,
    unread_count,
)


def make(id, user_id, timestamp, score=10, status="open", direction="inbound", body="hello", is_read=False):
    return Message(id=id, user_id=user_id, timestamp=timestamp, body=body, direction=direction,
                   urgency_score=score, status=status, is_read=is_read)


@pytest.fixture
def messages():
    return [
        make("a", "1", "2017-01-30 08:00:00", score=60, body="loan rejected"),
        make("b", "2", "2017-01-30 09:00:00", score=60, body="rejected again"),
        make("c", "1", "2017-01-30 10:00:00", score=10, body="balance please"),
        make("d", "3", "2017-01-30 07:00:00", score=100, status="resolved", body="fraud"),
        make("e", "2", "2017-01-30 11:00:00", direction="outbound", score=0, is_read=True, body="On it"),
    ]


@pytest.fixture
def users():
    return {u: generate_profile(u) for u in ("1", "2", "3")}


# ── Inbox ─────────────────────────────────────────────────────────────────────

class TestInbox:
    def test_urgency_ties_newest_first(self, messages, users):
        inbox = filter_inbox(messages, users)
        assert [m.id for m in inbox] == ["b", "a", "c", "e"]

    def test_newest(self, messages, users):
        inbox = filter_inbox(messages, users, sort_option="newest")
        assert [m.id for m in inbox] == ["e", "c", "b", "a"]

    def test_oldest(self, messages, users):
        inbox = filter_inbox(messages, users, sort_option="oldest")
        assert [m.id for m in inbox] == ["a", "b", "c", "e"]

    def test_resolved_filter(self, messages, users):
        assert [m.id for m in filter_inbox(messages, users, filter_status="resolved")] == ["d"]

    def test_search_body_case_insensitive(self, messages, users):
        assert {m.id for m in filter_inbox(messages, users, search="REJECTED")} == {"a", "b"}

    def test_search_user_id(self, messages, users):
        assert {m.id for m in filter_inbox(messages, users, search="2")} == {"b", "e"}

    def test_search_customer_name(self, messages, users):
        assert {m.id for m in filter_inbox(messages, users, search="customer 1")} == {"a", "c"}

    def test_search_without_profile(self, messages):
        assert {m.id for m in filter_inbox(messages, {}, search="balance")} == {"c"}

    def test_no_match(self, messages, users):
        assert filter_inbox(messages, users, search="nothing like this") == []

    def test_input_not_mutated(self, messages, users):
        before = list(messages)
        filter_inbox(messages, users, sort_option="oldest")
        assert messages == before

    @pytest.mark.parametrize("kwargs", [{"sort_option": "priority"}, {"filter_status": "closed"}])
    def test_invalid_parameters(self, messages, users, kwargs):
        with pytest.raises(ValueError):
            filter_inbox(messages, users, **kwargs)


# ── Conversation ──────────────────────────────────────────────────────────────

class TestConversation:
    def test_transcript_ascending(self, messages):
        assert [m.id for m in conversation_transcript(messages, "2")] == ["b", "e"]

    def test_transcript_includes_resolved(self, messages):
        assert [m.id for m in conversation_transcript(messages, "3")] == ["d"]

    def test_transcript_equal_timestamps_keep_arrival_order(self):
        # snapshots are newest insert first
        later = make("y", "9", "2017-01-30 08:00:00")
        earlier = make("x", "9", "2017-01-30 08:00:00")
        assert [m.id for m in conversation_transcript([later, earlier], "9")] == ["x", "y"]

    def test_unknown_user(self, messages):
        assert conversation_transcript(messages, "404") == []

    def test_open_indicator(self, messages):
        assert has_open_messages(messages, "1")
        assert not has_open_messages(messages, "3")
        assert not has_open_messages(messages, "404")
        assert not has_open_messages(messages, None)

    def test_unread(self, messages):
        assert unread_count(messages) == 4
        assert unread_count(messages, "2") == 1
        assert unread_count(messages, "404") == 0


# ── Stats ─────────────────────────────────────────────────────────────────────

class TestStats:
    def test_stats(self, messages):
        stats = message_stats(messages)
        assert stats["total"] == 5
        assert stats["status_counts"] == {"open": 4, "resolved": 1}
        assert stats["urgency_distribution"] == {"High": 2, "Normal": 1, "Critical": 1}
        assert stats["volume_over_time"] == [{"date": "2017-01-30", "count": 5}]
        assert stats["top_open_customers"] == {"1": 2, "2": 1}
        assert stats["unread"] == 4

    def test_unparseable_timestamps_skipped_in_volume(self):
        stats = message_stats([make("a", "1", "yesterday-ish")])
        assert stats["total"] == 1
        assert stats["volume_over_time"] == []

    def test_empty(self):
        stats = message_stats([])
        assert stats["total"] == 0
        assert stats["volume_over_time"] == []
