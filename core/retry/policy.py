"""
Courtside Core Retry - Policy
===============================
Attempt budget and exponential backoff schedule.

    delay after failed attempt n = base_delay * 2 ** (n - 1)

No jitter and no cap: the console retries a handful of times
against one backend and the schedule must be predictable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    base_delay: float = 1.0

    def __post_init__(self) -> None:
        if isinstance(self.max_attempts, bool) or not isinstance(self.max_attempts, int):
            raise ValueError("max_attempts must be an integer.")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1.")
        if self.base_delay < 0:
            raise ValueError("base_delay must be >= 0.")

    def delay_after(self, attempt: int) -> float:
        """Seconds to wait after failed attempt `attempt` (1-based)."""
        if attempt < 1:
            raise ValueError("attempt is 1-based.")
        return self.base_delay * (2 ** (attempt - 1))

    def exhausted_action(self, action: Optional[str] = None) -> str:
        tag = f"retry_failed_after_{self.max_attempts}_attempts"
        return f"{action}:{tag}" if action else tag
