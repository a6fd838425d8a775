"""
Tests — Retry Helper
======================
Backoff schedule, final-failure classification and cancellation.
Sleeps are injected; nothing here waits on the wall clock.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from core.errors.classifier import ErrorClassifier
from core.errors.faults import BackendFault
from core.errors.presenter import BufferedPresenter
from core.errors.scheduling import ManualScheduler
from core.retry import RetryPolicy, with_retry
from core.time import FixedClock


T0 = datetime(2026, 3, 1, 9, 0, 0, tzinfo=timezone.utc)


def _classifier() -> ErrorClassifier:
    return ErrorClassifier(
        presenter=BufferedPresenter(),
        clock=FixedClock(T0),
        scheduler=ManualScheduler(),
    )


class _Flaky:
    """Fails `failures` times, then returns `value`."""

    def __init__(self, failures: int, value="ok"):
        self.failures = failures
        self.value = value
        self.calls = 0
        self.raised = []

    async def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            exc = ConnectionError(f"Connection refused (attempt {self.calls})")
            self.raised.append(exc)
            raise exc
        return self.value


class _BrokenScheduler:
    def call_later(self, delay_seconds, callback):
        raise RuntimeError("can't start new thread")


class _SleepRecorder:
    def __init__(self):
        self.delays = []

    async def __call__(self, seconds):
        self.delays.append(seconds)


# ══════════════════════════════════════════════════════════════
# POLICY
# ══════════════════════════════════════════════════════════════

class TestRetryPolicy:
    def test_delays_double(self):
        policy = RetryPolicy(max_attempts=4, base_delay=0.5)
        assert [policy.delay_after(n) for n in (1, 2, 3)] == [0.5, 1.0, 2.0]

    def test_attempt_is_one_based(self):
        with pytest.raises(ValueError):
            RetryPolicy().delay_after(0)

    def test_single_attempt_never_sleeps(self):
        sleep = _SleepRecorder()
        with pytest.raises(ConnectionError):
            asyncio.run(with_retry(_Flaky(failures=1), 1, classifier=_classifier(), sleep=sleep))
        assert sleep.delays == []

    @pytest.mark.parametrize("kwargs", [{"max_attempts": 0}, {"base_delay": -1}, {"max_attempts": 2.5}])
    def test_rejects_bad_values(self, kwargs):
        with pytest.raises(ValueError):
            RetryPolicy(**kwargs)

    def test_exhausted_action(self):
        policy = RetryPolicy(max_attempts=3)
        assert policy.exhausted_action() == "retry_failed_after_3_attempts"
        assert policy.exhausted_action("load_members") == "load_members:retry_failed_after_3_attempts"


# ══════════════════════════════════════════════════════════════
# SUCCESS PATHS
# ══════════════════════════════════════════════════════════════

class TestSuccess:
    def test_first_attempt_success(self):
        op = _Flaky(failures=0, value=42)
        sleep = _SleepRecorder()
        classifier = _classifier()
        result = asyncio.run(with_retry(op, classifier=classifier, sleep=sleep))
        assert result == 42
        assert op.calls == 1
        assert sleep.delays == []
        assert len(classifier) == 0

    def test_succeeds_on_third_attempt(self):
        op = _Flaky(failures=2, value="booked")
        sleep = _SleepRecorder()
        classifier = _classifier()
        result = asyncio.run(with_retry(op, 3, 0.1, classifier=classifier, sleep=sleep))
        assert result == "booked"
        assert op.calls == 3
        assert sleep.delays == [0.1, 0.2]
        assert len(classifier) == 0


# ══════════════════════════════════════════════════════════════
# FAILURE PATH
# ══════════════════════════════════════════════════════════════

class TestExhausted:
    def test_raises_last_fault_after_all_attempts(self):
        op = _Flaky(failures=10)
        sleep = _SleepRecorder()
        classifier = _classifier()
        with pytest.raises(ConnectionError) as exc_info:
            asyncio.run(with_retry(op, classifier=classifier, sleep=sleep))
        assert op.calls == 3
        assert exc_info.value is op.raised[-1]
        assert sleep.delays == [1.0, 2.0]

    def test_final_fault_classified_once(self):
        op = _Flaky(failures=10)
        classifier = _classifier()
        with pytest.raises(ConnectionError):
            asyncio.run(with_retry(op, 2, 0, classifier=classifier, sleep=_SleepRecorder()))
        (err,) = classifier.snapshot()
        assert err.internal_message == str(op.raised[-1])
        assert err.context.action == "retry_failed_after_2_attempts"

    def test_existing_action_is_kept(self):
        op = _Flaky(failures=10)
        classifier = _classifier()
        with pytest.raises(ConnectionError):
            asyncio.run(
                with_retry(
                    op,
                    3,
                    0,
                    {"action": "load_members", "actor_id": "u1"},
                    classifier=classifier,
                    sleep=_SleepRecorder(),
                )
            )
        (err,) = classifier.snapshot()
        assert err.context.action == "load_members:retry_failed_after_3_attempts"
        assert err.context.actor_id == "u1"

    def test_scheduler_failure_keeps_original_fault(self):
        fault = BackendFault("XX000", "server error")

        async def failing():
            raise fault

        classifier = ErrorClassifier(
            presenter=BufferedPresenter(),
            clock=FixedClock(T0),
            scheduler=_BrokenScheduler(),
        )
        with pytest.raises(BackendFault) as exc_info:
            asyncio.run(with_retry(failing, 2, 0.0, classifier=classifier, sleep=_SleepRecorder()))
        assert exc_info.value is fault
        assert len(classifier) == 1

    def test_invalid_policy_runs_nothing(self):
        op = _Flaky(failures=0)
        with pytest.raises(ValueError):
            asyncio.run(with_retry(op, 0, classifier=_classifier(), sleep=_SleepRecorder()))
        assert op.calls == 0


# ══════════════════════════════════════════════════════════════
# CANCELLATION
# ══════════════════════════════════════════════════════════════

class TestCancellation:
    def test_cancel_during_attempt(self):
        calls = []
        classifier = _classifier()

        async def cancelled():
            calls.append(1)
            raise asyncio.CancelledError()

        async def main():
            try:
                await with_retry(cancelled, classifier=classifier, sleep=_SleepRecorder())
            except asyncio.CancelledError:
                return "cancelled"
            return "finished"

        assert asyncio.run(main()) == "cancelled"
        assert calls == [1]
        assert len(classifier) == 0

    def test_cancel_during_sleep(self):
        op = _Flaky(failures=10)
        classifier = _classifier()

        async def cancelling_sleep(_seconds):
            raise asyncio.CancelledError()

        async def main():
            try:
                await with_retry(op, classifier=classifier, sleep=cancelling_sleep)
            except asyncio.CancelledError:
                return "cancelled"
            return "finished"

        assert asyncio.run(main()) == "cancelled"
        assert op.calls == 1
        assert len(classifier) == 0
