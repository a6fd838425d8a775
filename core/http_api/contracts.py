"""
Courtside HTTP API - Contracts
==============================
Framework-agnostic request/response DTOs for the dashboard endpoints.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

MAX_WINDOW_HOURS = 24 * 365
MAX_EVENTS_LIMIT = 1000


@dataclass(frozen=True)
class StatsWindowRequest:
    hours: float

    def __post_init__(self):
        if isinstance(self.hours, bool) or not isinstance(self.hours, (int, float)):
            raise ValueError("hours must be a number.")
        if not math.isfinite(self.hours):
            raise ValueError("hours must be finite.")
        if self.hours <= 0 or self.hours > MAX_WINDOW_HOURS:
            raise ValueError(f"hours must be in (0, {MAX_WINDOW_HOURS}].")


@dataclass(frozen=True)
class TimeRangeRequest:
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def __post_init__(self):
        if (self.start is None) != (self.end is None):
            raise ValueError("start and end must be given together.")
        for name in ("start", "end"):
            value = getattr(self, name)
            if value is not None:
                if not isinstance(value, datetime) or value.tzinfo is None:
                    raise ValueError(f"{name} must be a timezone-aware datetime.")
        if self.start is not None and self.start > self.end:
            raise ValueError("start must not be after end.")

    @property
    def is_bounded(self) -> bool:
        return self.start is not None


@dataclass(frozen=True)
class ActorEventsRequest:
    actor_id: str
    limit: int = 50

    def __post_init__(self):
        if not self.actor_id or not isinstance(self.actor_id, str):
            raise ValueError("actor_id must be a non-empty string.")
        if isinstance(self.limit, bool) or not isinstance(self.limit, int):
            raise ValueError("limit must be an integer.")
        if self.limit < 1 or self.limit > MAX_EVENTS_LIMIT:
            raise ValueError(f"limit must be in [1, {MAX_EVENTS_LIMIT}].")


@dataclass(frozen=True)
class ActorDetectRequest:
    actor_id: str

    def __post_init__(self):
        if not self.actor_id or not isinstance(self.actor_id, str):
            raise ValueError("actor_id must be a non-empty string.")


@dataclass(frozen=True)
class HttpApiErrorBody:
    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class HttpApiResponse:
    ok: bool
    data: Any = None
    error: Optional[HttpApiErrorBody] = None

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            return {"ok": True, "data": self.data}
        if self.error is None:
            raise ValueError("error must be set when ok is False.")
        return {"ok": False, "error": self.error.to_dict()}
