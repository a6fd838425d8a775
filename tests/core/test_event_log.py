"""
Tests — Time-Ordered Event Log
================================
Ordering, bounded capacity, range reads and eviction.
"""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone

import pytest

from core.eventlog import TimeOrderedLog


T0 = datetime(2026, 3, 1, 9, 0, 0, tzinfo=timezone.utc)


def _at(minutes: int, name: str):
    return (T0 + timedelta(minutes=minutes), name)


def _log(capacity=None) -> TimeOrderedLog:
    return TimeOrderedLog(timestamp_of=lambda item: item[0], capacity=capacity)


def _names(items) -> list:
    return [name for _, name in items]


# ── Ordering ─────────────────────────────────────────────────

class TestOrdering:
    def test_in_order_appends(self):
        log = _log()
        for i in range(3):
            log.append(_at(i, f"e{i}"))
        assert _names(log.snapshot()) == ["e0", "e1", "e2"]

    def test_out_of_order_append_is_placed_chronologically(self):
        log = _log()
        log.append(_at(0, "a"))
        log.append(_at(10, "c"))
        log.append(_at(5, "b"))
        assert _names(log.snapshot()) == ["a", "b", "c"]

    def test_equal_timestamps_keep_insertion_order(self):
        log = _log()
        log.append(_at(1, "first"))
        log.append(_at(1, "second"))
        log.append(_at(0, "earlier"))
        log.append(_at(1, "third"))
        assert _names(log.snapshot()) == ["earlier", "first", "second", "third"]

    def test_last_timestamp(self):
        log = _log()
        assert log.last_timestamp() is None
        log.append(_at(3, "x"))
        log.append(_at(1, "y"))
        assert log.last_timestamp() == T0 + timedelta(minutes=3)

    def test_snapshot_is_a_copy(self):
        log = _log()
        log.append(_at(0, "a"))
        snap = log.snapshot()
        log.append(_at(1, "b"))
        assert _names(snap) == ["a"]
        assert len(log) == 2


# ── Capacity ─────────────────────────────────────────────────

class TestCapacity:
    def test_rejects_non_positive_capacity(self):
        with pytest.raises(ValueError):
            TimeOrderedLog(timestamp_of=lambda item: item[0], capacity=0)

    def test_overflow_drops_oldest_first(self):
        log = _log(capacity=3)
        for i in range(5):
            log.append(_at(i, f"e{i}"))
        assert _names(log.snapshot()) == ["e2", "e3", "e4"]
        assert len(log) == 3

    def test_long_run_stays_bounded_and_ordered(self):
        log = _log(capacity=10)
        for i in range(500):
            log.append(_at(i, f"e{i}"))
        assert len(log) == 10
        assert _names(log.snapshot()) == [f"e{i}" for i in range(490, 500)]


# ── Range reads ──────────────────────────────────────────────

class TestRangeReads:
    def test_since_includes_cutoff(self):
        log = _log()
        for i in range(4):
            log.append(_at(i * 10, f"e{i}"))
        assert _names(log.since(T0 + timedelta(minutes=20))) == ["e2", "e3"]

    def test_between_is_inclusive_on_both_ends(self):
        log = _log()
        for i in range(5):
            log.append(_at(i * 10, f"e{i}"))
        result = log.between(T0 + timedelta(minutes=10), T0 + timedelta(minutes=30))
        assert _names(result) == ["e1", "e2", "e3"]

    def test_between_empty_range(self):
        log = _log()
        log.append(_at(0, "a"))
        assert log.between(T0 + timedelta(hours=1), T0 + timedelta(hours=2)) == ()


# ── Eviction ─────────────────────────────────────────────────

class TestEviction:
    def test_evicts_strictly_older_than_cutoff(self):
        log = _log()
        for i in range(5):
            log.append(_at(i, f"e{i}"))
        removed = log.evict_older_than(T0 + timedelta(minutes=2))
        assert removed == 2
        assert _names(log.snapshot()) == ["e2", "e3", "e4"]

    def test_evict_nothing(self):
        log = _log()
        log.append(_at(5, "a"))
        assert log.evict_older_than(T0) == 0
        assert len(log) == 1

    def test_evict_everything_then_append(self):
        log = _log()
        for i in range(3):
            log.append(_at(i, f"e{i}"))
        assert log.evict_older_than(T0 + timedelta(days=1)) == 3
        assert len(log) == 0
        assert log.last_timestamp() is None
        log.append(_at(0, "again"))
        assert _names(log.snapshot()) == ["again"]

    def test_repeated_evictions_keep_reads_consistent(self):
        log = _log()
        for i in range(100):
            log.append(_at(i, f"e{i}"))
        for cutoff in (10, 20, 30, 60):
            log.evict_older_than(T0 + timedelta(minutes=cutoff))
        assert len(log) == 40
        assert _names(log.since(T0 + timedelta(minutes=95))) == [f"e{i}" for i in range(95, 100)]
        assert _names(log.between(T0, T0 + timedelta(minutes=61))) == ["e60", "e61"]


# ── Concurrency ──────────────────────────────────────────────

class TestConcurrentEviction:
    def test_cleanup_never_drops_records_appended_after_cutoff(self):
        log = _log()
        for i in range(200):
            log.append(_at(-200 + i, f"old{i}"))

        writers, per_writer = 4, 250
        start = threading.Barrier(writers + 1)
        done = threading.Event()

        def write(w):
            start.wait()
            for i in range(per_writer):
                log.append(_at((i * 7) % 50, f"w{w}-{i}"))

        def evict():
            start.wait()
            while not done.is_set():
                log.evict_older_than(T0)

        threads = [threading.Thread(target=write, args=(w,)) for w in range(writers)]
        evictor = threading.Thread(target=evict)
        evictor.start()
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        done.set()
        evictor.join()
        log.evict_older_than(T0)

        items = log.snapshot()
        expected = {f"w{w}-{i}" for w in range(writers) for i in range(per_writer)}
        assert set(_names(items)) == expected
        assert len(items) == writers * per_writer
        stamps = [stamp for stamp, _ in items]
        assert stamps == sorted(stamps)
