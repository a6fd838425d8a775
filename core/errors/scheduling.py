"""
Courtside Core Errors - Scheduling
====================================
Deferred and periodic callbacks used by the guard components:
- the one-shot "you may retry" hint after a retryable error
- hourly error-log cleanup and daily audit-log cleanup

Scheduled callbacks run off the dispatch path. A failing callback
is logged and never reaches the code that scheduled it.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional, Protocol, Tuple

logger = logging.getLogger("courtside.errors")


class Scheduler(Protocol):
    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        ...  # pragma: no cover


def _run_safely(callback: Callable[[], None]) -> None:
    name = getattr(callback, "__qualname__", repr(callback))
    try:
        callback()
    except Exception as exc:
        logger.error(f"Scheduled callback failed: {name}: {exc}", exc_info=True)


# ══════════════════════════════════════════════════════════════
# ONE-SHOT SCHEDULERS
# ══════════════════════════════════════════════════════════════

class ThreadingScheduler:
    """Runs each callback on a daemon threading.Timer."""

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        timer = threading.Timer(delay_seconds, _run_safely, args=(callback,))
        timer.daemon = True
        timer.start()


class ManualScheduler:
    """
    Test scheduler: records calls, runs them on demand.

    Usage:
        scheduler = ManualScheduler()
        ...
        assert scheduler.delays == (2.0,)
        scheduler.run_pending()
    """

    def __init__(self) -> None:
        self._pending: List[Tuple[float, Callable[[], None]]] = []

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        self._pending.append((delay_seconds, callback))

    @property
    def delays(self) -> Tuple[float, ...]:
        return tuple(delay for delay, _ in self._pending)

    def run_pending(self) -> int:
        pending, self._pending = self._pending, []
        for _, callback in pending:
            _run_safely(callback)
        return len(pending)


# ══════════════════════════════════════════════════════════════
# PERIODIC TASK
# ══════════════════════════════════════════════════════════════

class PeriodicTask:
    """
    Repeats a callback every `interval_seconds` on daemon timers.

    Each run is scheduled only after the previous one returns,
    so runs never overlap.
    """

    def __init__(
        self,
        name: str,
        interval_seconds: float,
        callback: Callable[[], None],
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive.")
        self.name = name
        self._interval = interval_seconds
        self._callback = callback
        self._timer: Optional[threading.Timer] = None
        self._stopped = threading.Event()
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        with self._lock:
            return self._timer is not None and not self._stopped.is_set()

    def start(self) -> None:
        with self._lock:
            if self._timer is not None:
                return
            self._stopped.clear()
            self._schedule_locked()
        logger.info(f"Periodic task '{self.name}' started (every {self._interval:.0f}s)")

    def stop(self) -> None:
        self._stopped.set()
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def run_once(self) -> None:
        _run_safely(self._callback)

    def _schedule_locked(self) -> None:
        timer = threading.Timer(self._interval, self._tick)
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _tick(self) -> None:
        if self._stopped.is_set():
            return
        self.run_once()
        with self._lock:
            if not self._stopped.is_set():
                self._schedule_locked()
