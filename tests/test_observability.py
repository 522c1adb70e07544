"""Tests for in-process metrics."""

import pytest

from observability import Metrics, TimerStats, log_run_summary, metrics


@pytest.fixture
def m():
    return Metrics()


def test_counter_accumulates(m):
    m.counter("feed.fetches")
    m.counter("feed.fetches", 2)
    assert m.summary()["counters"] == {"feed.fetches": 3}


def test_timer_records_duration(m):
    with m.timer("ensemble.predict"):
        pass
    with m.timer("ensemble.predict"):
        pass
    timer = m.summary()["timers"]["ensemble.predict"]
    assert timer["count"] == 2
    assert timer["max"] >= timer["avg"] >= 0
    assert timer["total"] == pytest.approx(timer["avg"] * 2)


def test_timer_records_on_exception(m):
    with pytest.raises(RuntimeError):
        with m.timer("boom"):
            raise RuntimeError("x")
    assert m.summary()["timers"]["boom"]["count"] == 1


def test_reset(m):
    m.counter("a")
    with m.timer("b"):
        pass
    m.reset()
    assert m.summary() == {"counters": {}, "timers": {}}


def test_summary_is_a_copy(m):
    m.counter("a")
    m.summary()["counters"]["a"] = 99
    assert m.summary()["counters"]["a"] == 1


def test_log_run_summary_smoke():
    metrics.counter("ensemble.predictions")
    log_run_summary()


def test_timer_keeps_aggregate_not_samples(m):
    for _ in range(1000):
        with m.timer("ensemble.predict"):
            pass
    stats = m._timers["ensemble.predict"]
    assert isinstance(stats, TimerStats)
    assert stats.count == 1000
    assert m.summary()["timers"]["ensemble.predict"]["count"] == 1000


def test_timer_stats_add():
    stats = TimerStats()
    stats.add(0.5)
    stats.add(0.25)
    assert (stats.count, stats.total, stats.max) == (2, 0.75, 0.5)
