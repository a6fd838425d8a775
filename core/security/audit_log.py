"""
Courtside Core Security - Security Audit Log
==============================================
Append-only, time-ordered record of security-relevant events.
No updates, no deletes; the only removal is retention cleanup.

Record flow:
1. Assign id and timestamp (timestamps never go backwards).
2. Append to the bounded log.
3. Log per runtime mode.
4. Notify listeners synchronously. A failing listener is logged
   and the remaining listeners still run.
5. High/critical risk: hand the event to the high-risk handler
   (best-effort delivery to an external monitor).

Time is injected via Clock protocol - no datetime.now() calls.
"""

from __future__ import annotations

import itertools
import json
import logging
import uuid
from collections import Counter
from datetime import timedelta
from threading import Lock
from typing import Callable, List, Optional, Tuple

from core.config.guard_settings import GuardSettings
from core.eventlog import TimeOrderedLog
from core.security.anomaly_detection import DenialWindowDetector
from core.security.models import (
    AccessResult,
    RiskLevel,
    SecurityEvent,
    SecurityEventDetails,
    SecurityEventInput,
    SecurityEventType,
    SecurityStats,
    TimeRange,
)
from core.time import Clock, SystemClock

logger = logging.getLogger("courtside.security")

SecurityListener = Callable[[SecurityEvent], None]
HighRiskHandler = Callable[[SecurityEvent], None]


def log_critical_event(event: SecurityEvent) -> None:
    """Default high-risk handler: critical events always reach the error log."""
    if event.risk_level is RiskLevel.CRITICAL:
        logger.error(
            f"[CRITICAL SECURITY EVENT] "
            f"{json.dumps(event.to_dict(), sort_keys=True, default=str)}"
        )


class SecurityAuditLog:
    """
    In-memory security audit trail.

    Args:
        clock:             Time source (SystemClock by default).
        settings:          Retention, capacity, mode and the
                           suspicious-actor rule parameters.
        high_risk_handler: Called once per high/critical event.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        settings: Optional[GuardSettings] = None,
        high_risk_handler: Optional[HighRiskHandler] = None,
    ) -> None:
        self._clock = clock or SystemClock()
        self._settings = settings or GuardSettings()
        self._high_risk_handler = high_risk_handler
        self._detector = DenialWindowDetector(
            window=self._settings.suspicious_window,
            threshold=self._settings.suspicious_threshold,
        )
        self._events: TimeOrderedLog[SecurityEvent] = TimeOrderedLog(
            timestamp_of=lambda e: e.timestamp,
            capacity=self._settings.audit_log_capacity,
        )
        self._listeners: List[SecurityListener] = []
        self._listeners_lock = Lock()
        self._record_lock = Lock()
        self._sequence = itertools.count(1)

    # ══════════════════════════════════════════════════════════
    # RECORD
    # ══════════════════════════════════════════════════════════

    def record(self, event_input: SecurityEventInput) -> SecurityEvent:
        with self._record_lock:
            timestamp = self._clock.now_utc()
            last = self._events.last_timestamp()
            if last is not None and timestamp < last:
                timestamp = last
            event_id = (
                f"sec_{int(timestamp.timestamp() * 1000)}"
                f"_{next(self._sequence)}_{uuid.uuid4().hex[:8]}"
            )
            event = SecurityEvent.from_input(event_input, event_id, timestamp)
            self._events.append(event)

        self._log(event)
        self._notify(event)
        if event.risk_level.is_high:
            self._forward_high_risk(event)
        return event

    def _log(self, event: SecurityEvent) -> None:
        if self._settings.mode.verbose:
            logger.info(
                f"Security event {event.type.value}: actor={event.actor_id} "
                f"role={event.actor_role} action={event.action} "
                f"resource={event.resource} result={event.result.value} "
                f"risk={event.risk_level.value}"
            )
        elif event.risk_level.is_high:
            logger.warning(json.dumps(event.to_dict(), sort_keys=True, default=str))

    def _notify(self, event: SecurityEvent) -> None:
        with self._listeners_lock:
            listeners = tuple(self._listeners)
        for listener in listeners:
            try:
                listener(event)
            except Exception as exc:
                logger.error(
                    f"Security listener failed for {event.id}: {exc}",
                    exc_info=True,
                )

    def _forward_high_risk(self, event: SecurityEvent) -> None:
        if self._high_risk_handler is None:
            return
        try:
            self._high_risk_handler(event)
        except Exception as exc:
            logger.error(
                f"High-risk handler failed for {event.id}: {exc}",
                exc_info=True,
            )

    # ══════════════════════════════════════════════════════════
    # LISTENERS
    # ══════════════════════════════════════════════════════════

    def add_listener(self, listener: SecurityListener) -> None:
        with self._listeners_lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: SecurityListener) -> None:
        """Remove a listener; unknown listeners are ignored."""
        with self._listeners_lock:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

    # ══════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════

    def get_stats(self, time_range: Optional[TimeRange] = None) -> SecurityStats:
        if time_range is None:
            events = self._events.snapshot()
        else:
            events = self._events.between(time_range.start, time_range.end)

        by_type: Counter = Counter(e.type.value for e in events)
        by_risk: Counter = Counter(e.risk_level.value for e in events)
        by_actor: Counter = Counter(e.actor_id for e in events)

        return SecurityStats(
            total=len(events),
            by_type=dict(by_type),
            by_risk=dict(by_risk),
            by_actor=dict(by_actor),
            denied_attempts=sum(1 for e in events if e.result is AccessResult.DENIED),
            suspicious_activity_count=by_type.get(
                SecurityEventType.SUSPICIOUS_ACTIVITY.value, 0
            ),
        )

    def recent_events_for_actor(
        self,
        actor_id: str,
        limit: int = 50,
    ) -> Tuple[SecurityEvent, ...]:
        """Most recent first. Equal timestamps keep recording order."""
        if limit < 0:
            raise ValueError("limit must be >= 0.")
        own = [e for e in self._events.snapshot() if e.actor_id == actor_id]
        own.sort(key=lambda e: e.timestamp, reverse=True)
        return tuple(own[:limit])

    def snapshot(self) -> Tuple[SecurityEvent, ...]:
        return self._events.snapshot()

    def __len__(self) -> int:
        return len(self._events)

    # ══════════════════════════════════════════════════════════
    # SUSPICIOUS ACTORS
    # ══════════════════════════════════════════════════════════

    def detect_suspicious(self, actor_id: str) -> bool:
        """
        Flag an actor with too many recent denials.

        On a hit, records one suspicious_activity event. Its result
        is ERROR rather than DENIED so the flag itself never counts
        toward a later check.
        """
        recent = self.recent_events_for_actor(actor_id, self._detector.window)
        result = self._detector.evaluate(recent)
        if not result.suspicious:
            return False

        self.record(
            SecurityEventInput(
                type=SecurityEventType.SUSPICIOUS_ACTIVITY,
                actor_id=actor_id,
                actor_role=self._settings.detector_role,
                action="multiple_access_denied",
                resource="system",
                result=AccessResult.ERROR,
                risk_level=RiskLevel.HIGH,
                details=SecurityEventDetails(
                    reason=result.description,
                    additional_context={
                        "denied_count": result.denied_count,
                        "window_size": result.window_size,
                    },
                ),
            )
        )
        return True

    # ══════════════════════════════════════════════════════════
    # RETENTION
    # ══════════════════════════════════════════════════════════

    def cleanup(self, retention_days: Optional[float] = None) -> int:
        """Evict events older than the retention window. Returns the count."""
        days = self._settings.audit_retention_days if retention_days is None else retention_days
        if days < 0:
            raise ValueError("retention_days must be >= 0.")
        cutoff = self._clock.now_utc() - timedelta(days=days)
        removed = self._events.evict_older_than(cutoff)
        if removed:
            logger.info(f"Security audit cleanup removed {removed} event(s) older than {cutoff.isoformat()}")
        return removed
