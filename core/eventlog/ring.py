"""
Courtside Core Event Log - Time-Ordered Bounded Log
=====================================================
In-memory store shared (as a type, never as an instance) by the
error classifier and the security audit log.

Layout:
- Two parallel lists (timestamps, items) kept sorted by timestamp.
- A head index marks the first live entry. Eviction and capacity
  overflow only move the head; the dead prefix is compacted once
  it makes up half the list, so append stays O(1) amortized.
- Equal timestamps keep insertion order.

Append, evict and snapshot run under one lock per log instance.
Readers receive tuples, never the internal lists.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from datetime import datetime
from threading import Lock
from typing import Callable, Generic, List, Optional, Tuple, TypeVar

T = TypeVar("T")


class TimeOrderedLog(Generic[T]):
    """
    Bounded, time-sorted, append-only log.

    Args:
        timestamp_of: Extracts the ordering timestamp from an item.
        capacity:     Maximum live entries; oldest are dropped first.
                      None means unbounded.
    """

    def __init__(
        self,
        timestamp_of: Callable[[T], datetime],
        capacity: Optional[int] = None,
    ) -> None:
        if capacity is not None and capacity < 1:
            raise ValueError("capacity must be a positive integer or None.")
        self._timestamp_of = timestamp_of
        self._capacity = capacity
        self._stamps: List[datetime] = []
        self._items: List[T] = []
        self._head = 0
        self._lock = Lock()

    # ── writes ────────────────────────────────────────────────

    def append(self, item: T) -> None:
        """Insert an item at its chronological position."""
        stamp = self._timestamp_of(item)
        with self._lock:
            if len(self._stamps) == self._head or stamp >= self._stamps[-1]:
                self._stamps.append(stamp)
                self._items.append(item)
            else:
                pos = bisect_right(self._stamps, stamp, lo=self._head)
                self._stamps.insert(pos, stamp)
                self._items.insert(pos, item)

            if self._capacity is not None:
                overflow = (len(self._stamps) - self._head) - self._capacity
                if overflow > 0:
                    self._head += overflow
                    self._compact()

    def evict_older_than(self, cutoff: datetime) -> int:
        """Drop every entry with timestamp < cutoff. Returns the count."""
        with self._lock:
            pos = bisect_left(self._stamps, cutoff, lo=self._head)
            evicted = pos - self._head
            self._head = pos
            self._compact()
            return evicted

    def last_timestamp(self) -> Optional[datetime]:
        with self._lock:
            if len(self._stamps) == self._head:
                return None
            return self._stamps[-1]

    def _compact(self) -> None:
        # caller holds the lock
        if self._head and self._head * 2 >= len(self._stamps):
            del self._stamps[: self._head]
            del self._items[: self._head]
            self._head = 0

    # ── reads ─────────────────────────────────────────────────

    def snapshot(self) -> Tuple[T, ...]:
        """All live entries, oldest first."""
        with self._lock:
            return tuple(self._items[self._head:])

    def since(self, cutoff: datetime) -> Tuple[T, ...]:
        """Entries with timestamp >= cutoff, oldest first."""
        with self._lock:
            pos = bisect_left(self._stamps, cutoff, lo=self._head)
            return tuple(self._items[pos:])

    def between(self, start: datetime, end: datetime) -> Tuple[T, ...]:
        """Entries with start <= timestamp <= end, oldest first."""
        with self._lock:
            lo = bisect_left(self._stamps, start, lo=self._head)
            hi = bisect_right(self._stamps, end, lo=lo)
            return tuple(self._items[lo:hi])

    def __len__(self) -> int:
        with self._lock:
            return len(self._stamps) - self._head
