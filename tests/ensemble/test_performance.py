"""Tests for VoteStore and PerformanceTracker."""

import random
import threading

import pytest

from ensemble.history import follow_vote
from ensemble.performance import PerformanceTracker, VoteStore
from shared_types import Vote


def _record_hindsight(store, history, predictor, correct_sessions):
    """Record a vote for each session: right if listed in correct_sessions, else wrong."""
    for prev, nxt in zip(history, history[1:]):
        right = follow_vote(nxt.outcome)
        wrong = Vote.XIU if right is Vote.TAI else Vote.TAI
        store.record(predictor, prev.session, right if prev.session in correct_sessions else wrong)


class TestVoteStore:
    def test_record_and_get(self):
        store = VoteStore()
        assert store.record("trend", "#0000001", Vote.TAI)
        assert store.get("trend", "#0000001") is Vote.TAI
        assert len(store) == 1

    def test_missing_vote_is_none(self):
        assert VoteStore().get("trend", "#0000001") is Vote.NONE

    def test_write_once(self):
        store = VoteStore()
        store.record("bridge", "#0000009", Vote.XIU)
        assert store.record("bridge", "#0000009", Vote.TAI) is False
        assert store.get("bridge", "#0000009") is Vote.XIU

    def test_keys_are_per_predictor(self):
        store = VoteStore()
        store.record("trend", "#0000001", Vote.TAI)
        store.record("short", "#0000001", Vote.XIU)
        assert store.get("trend", "#0000001") is Vote.TAI
        assert store.get("short", "#0000001") is Vote.XIU

    def test_concurrent_writers(self):
        store = VoteStore()
        wins = []

        def worker(n):
            for i in range(200):
                if store.record("trend", f"#{i:07d}", Vote.TAI if n % 2 else Vote.XIU):
                    wins.append(i)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(store) == 200
        assert sorted(wins) == list(range(200))

    def test_clear(self):
        store = VoteStore()
        store.record("trend", "#0000001", Vote.TAI)
        store.clear()
        assert len(store) == 0


class TestPerformanceTracker:
    def test_neutral_without_enough_history(self, make_history):
        tracker = PerformanceTracker(VoteStore())
        assert tracker.score("trend", []) == 1.0
        assert tracker.score("trend", make_history("T")) == 1.0

    def test_no_recorded_votes_scores_zero(self, make_history):
        tracker = PerformanceTracker(VoteStore())
        assert tracker.score("trend", make_history("TXTXT")) == 0.0

    def test_all_correct_scores_two(self, make_history):
        history = make_history("TXTXT")
        store = VoteStore()
        _record_hindsight(store, history, "trend", {e.session for e in history})
        assert PerformanceTracker(store).score("trend", history) == 2.0

    def test_half_correct_scores_one(self, make_history):
        history = make_history("TXTXT")
        store = VoteStore()
        _record_hindsight(store, history, "trend", {history[0].session, history[1].session})
        assert PerformanceTracker(store).score("trend", history) == 1.0

    def test_lookback_limits_window(self, make_history):
        history = make_history("TX" * 10)
        store = VoteStore()
        # Only sessions older than the 10-round window are right
        _record_hindsight(store, history, "mean", {e.session for e in history[:9]})
        assert PerformanceTracker(store).score("mean", history) == 0.0
        assert PerformanceTracker(store, lookback=19).score("mean", history) == pytest.approx(1 + (9 - 9.5) / 9.5)

    def test_none_vote_never_counts(self, make_history):
        history = make_history("TTTT")
        store = VoteStore()
        for e in history:
            store.record("switch", e.session, Vote.NONE)
        assert PerformanceTracker(store).score("switch", history) == 0.0

    def test_scores_for_many(self, make_history):
        history = make_history("TXT")
        scores = PerformanceTracker(VoteStore()).scores(["trend", "short"], history)
        assert scores == {"trend": 0.0, "short": 0.0}

    def test_score_always_in_range(self, make_history):
        rng = random.Random(3)
        for _ in range(100):
            history = make_history("".join(rng.choice("TX") for _ in range(rng.randint(1, 25))))
            store = VoteStore()
            for e in history:
                store.record("trend", e.session, rng.choice(list(Vote)))
            score = PerformanceTracker(store).score("trend", history)
            assert 0.0 <= score <= 2.0
