"""
Courtside Core Retry - with_retry
===================================
Re-runs an async operation with exponential backoff.

On the final failure the original fault is classified once, with
the context action tagged by the attempt count, and then
re-raised unchanged. Intermediate failures are only logged.

Cancellation is never retried or classified.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from core.errors.classifier import ErrorClassifier
from core.errors.models import FaultContext
from core.retry.policy import RetryPolicy

logger = logging.getLogger("courtside.retry")

T = TypeVar("T")

SleepFunc = Callable[[float], Awaitable[Any]]


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    base_delay: float = 1.0,
    context: Any = None,
    *,
    classifier: ErrorClassifier,
    sleep: Optional[SleepFunc] = None,
) -> T:
    """
    Await `operation()` up to `max_attempts` times.

    Args:
        operation:    Zero-argument coroutine factory.
        max_attempts: Total attempts, >= 1.
        base_delay:   Seconds slept after the first failure; doubles
                      after each further failure.
        context:      FaultContext or mapping used when classifying
                      the final failure.
        classifier:   Receives the final failure.
        sleep:        Injectable sleep (asyncio.sleep by default).

    Raises:
        The last fault, after classification.
        asyncio.CancelledError immediately, unclassified.
    """
    policy = RetryPolicy(max_attempts=max_attempts, base_delay=base_delay)
    fault_context = FaultContext.coerce(context)
    _sleep = sleep or asyncio.sleep

    attempt = 1
    while True:
        try:
            return await operation()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            if attempt >= policy.max_attempts:
                classifier.handle(
                    exc,
                    fault_context.with_action(
                        policy.exhausted_action(fault_context.action)
                    ),
                )
                raise
            delay = policy.delay_after(attempt)
            logger.info(
                f"Attempt {attempt}/{policy.max_attempts} failed "
                f"({type(exc).__name__}: {exc}); retrying in {delay:.2f}s"
            )
        await _sleep(delay)
        attempt += 1
