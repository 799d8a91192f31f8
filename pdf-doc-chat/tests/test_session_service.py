#!/usr/bin/env python3
"""
Tests for the Redis-backed session store.
"""
import pytest
from services.session_service import SessionStore


def test_new_session_has_empty_history(fake_redis):
    assert SessionStore(fake_redis).get_history("nobody") == []


def test_append_preserves_order(fake_redis):
    store = SessionStore(fake_redis)
    store.append("s1", "user", "What is on page 2?")
    store.append("s1", "assistant", "A table of revenue.")

    history = store.get_history("s1")
    assert [(t.role, t.content) for t in history] == [
        ("user", "What is on page 2?"),
        ("assistant", "A table of revenue."),
    ]


def test_unknown_role_rejected(fake_redis):
    with pytest.raises(ValueError):
        SessionStore(fake_redis).append("s1", "robot", "beep")


def test_malformed_transcript_entries_are_skipped(fake_redis):
    store = SessionStore(fake_redis)
    store.append("s1", "user", "hi")
    fake_redis.rpush(store.history_key("s1"), "garbage", '{"role": "user"}')

    assert len(store.get_history("s1")) == 1


def test_sessions_are_isolated(fake_redis):
    store = SessionStore(fake_redis)
    store.append("a", "user", "one")
    store.track_document("a", "fp-a")

    assert store.get_history("b") == []
    assert store.documents("b") == set()


def test_track_document_deduplicates(fake_redis):
    store = SessionStore(fake_redis)
    store.track_document("s1", "fp1")
    store.track_document("s1", "fp1")
    store.track_document("s1", "fp2")

    assert store.documents("s1") == {"fp1", "fp2"}


def test_clear_returns_fingerprints_and_removes_state(fake_redis):
    store = SessionStore(fake_redis)
    store.append("s1", "user", "hi")
    store.track_document("s1", "fp1")

    assert store.clear("s1") == {"fp1"}
    assert store.get_history("s1") == []
    assert store.documents("s1") == set()


def test_append_turns_uses_one_push(fake_redis):
    store = SessionStore(fake_redis)

    turns = store.append_turns("s1", ("user", "q"), ("assistant", "a"))

    assert [t.role for t in turns] == ["user", "assistant"]
    assert len(fake_redis.lrange(store.history_key("s1"), 0, -1)) == 2


def test_append_turns_validates_before_writing(fake_redis):
    store = SessionStore(fake_redis)

    with pytest.raises(ValueError):
        store.append_turns("s1", ("user", "q"), ("robot", "a"))

    assert store.get_history("s1") == []
