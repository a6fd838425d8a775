"""
Courtside Core Security - Anomaly Detection
=============================================
Rule-based detection of suspicious actors.
No ML - a deterministic rule with explicit thresholds.

Rule: among an actor's `window` most recent security events,
`threshold` or more denied results mark the actor as suspicious.

The detector is pure. It reads a sequence of events and returns a
result; recording the resulting suspicious_activity event is the
audit log's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from core.security.models import AccessResult, SecurityEvent


@dataclass(frozen=True)
class SuspicionResult:
    """Result of a suspicion check."""

    suspicious: bool
    denied_count: int = 0
    window_size: int = 0
    description: str = ""

    @staticmethod
    def clean(denied_count: int = 0, window_size: int = 0) -> "SuspicionResult":
        return SuspicionResult(
            suspicious=False,
            denied_count=denied_count,
            window_size=window_size,
        )


class DenialWindowDetector:
    """
    Counts denials over an actor's most recent events.

    Args:
        window:    How many of the newest events to inspect.
        threshold: Denials needed to flag the actor.
    """

    def __init__(self, window: int = 10, threshold: int = 5) -> None:
        if window < 1:
            raise ValueError("window must be >= 1.")
        if threshold < 1 or threshold > window:
            raise ValueError("threshold must be between 1 and window.")
        self._window = window
        self._threshold = threshold

    @property
    def window(self) -> int:
        return self._window

    @property
    def threshold(self) -> int:
        return self._threshold

    def evaluate(self, events: Sequence[SecurityEvent]) -> SuspicionResult:
        """
        `events` are one actor's events, most recent first.
        Only the first `window` entries are considered.
        """
        recent = list(events[: self._window])
        denied = sum(1 for e in recent if e.result is AccessResult.DENIED)

        if denied < self._threshold:
            return SuspicionResult.clean(denied, len(recent))

        return SuspicionResult(
            suspicious=True,
            denied_count=denied,
            window_size=len(recent),
            description=(
                f"{denied} denied attempts in the last {len(recent)} events"
            ),
        )
