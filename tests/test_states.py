"""Tests for the session store and candidate matching."""

from utils.states import (
    SessionStore, SeriesSession, State, build_candidates, match_candidate,
)


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestSessionStore:
    def test_set_get_delete(self):
        store = SessionStore()
        store.set(1, "value")
        assert store.get(1) == "value"
        store.delete(1)
        assert store.get(1) is None

    def test_delete_missing_is_noop(self):
        SessionStore().delete(42)

    def test_topics_are_separate(self):
        store = SessionStore()
        store.set(1, "a", topic="flow")
        store.set(1, "b", topic="other")
        assert store.get(1) == "a"
        assert store.get(1, topic="other") == "b"

    def test_entry_expires(self):
        clock = FakeClock()
        store = SessionStore(ttl=60, clock=clock)
        store.set(1, "value")
        clock.now += 59
        assert store.get(1) == "value"
        clock.now += 1
        assert store.get(1) is None
        assert len(store) == 0

    def test_zero_ttl_never_expires(self):
        clock = FakeClock()
        store = SessionStore(ttl=0, clock=clock)
        store.set(1, "value")
        clock.now += 10 ** 9
        assert store.get(1) == "value"

    def test_purge_expired(self):
        clock = FakeClock()
        store = SessionStore(ttl=10, clock=clock)
        store.set(1, "old")
        clock.now += 5
        store.set(2, "new")
        clock.now += 6
        assert store.purge_expired() == 1
        assert store.get(2) == "new"
        assert len(store) == 1


class TestCandidates:
    def test_ordinals_start_at_one(self):
        candidates = build_candidates(["a", "b"], str)
        assert [(c.ordinal, c.label) for c in candidates] == [(1, "a"), (2, "b")]

    def test_limit_truncates(self):
        assert len(build_candidates(list("abcdef"), str, limit=3)) == 3

    def test_match_by_label(self):
        candidates = build_candidates(["Any", "HD-1080p"], str)
        assert match_candidate(candidates, "HD-1080p").record == "HD-1080p"

    def test_match_by_ordinal(self):
        candidates = build_candidates(["Any", "HD-1080p"], str)
        assert match_candidate(candidates, "2").record == "HD-1080p"

    def test_label_wins_over_ordinal(self):
        candidates = build_candidates(["720", "1"], str)
        assert match_candidate(candidates, "1").ordinal == 2

    def test_no_match(self):
        assert match_candidate(build_candidates(["Any"], str), "SD") is None

    def test_session_variant_carries_state(self):
        assert SeriesSession([]).state == State.AWAITING_SERIES

    def test_non_decimal_digits_do_not_match(self):
        candidates = build_candidates(["Any", "HD-1080p"], str)
        assert match_candidate(candidates, "²") is None
        assert match_candidate(candidates, "¹") is None
