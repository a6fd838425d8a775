"""
Courtside Core Errors - Classifier & Dispatcher
=================================================
Turns arbitrary faults into AppErrors and decides how each one
reaches the user.

classify(fault, context)
    FaultView -> first matching rule -> AppError -> error log.
    Never raises. Any failure inside classification degrades to
    a silent, retryable UNKNOWN error.

dispatch(app_error)
    silent     -> nothing
    critical   -> modal
    high       -> blocking toast (+ unauthorized_access audit event
                  for permission/authorization with a known actor)
    medium     -> warning toast
    low        -> informational toast
    retryable  -> one "you may retry" hint after a fixed delay

Time is injected via Clock protocol - no datetime.now() calls.
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import timedelta
from typing import Any, Optional, Tuple

from core.config.guard_settings import GuardSettings
from core.errors.faults import FaultView
from core.errors.models import (
    AppError,
    ErrorBadge,
    ErrorContext,
    ErrorKind,
    ErrorSeverity,
    ErrorStats,
    FaultContext,
)
from core.errors.presenter import Presenter, ToastLevel
from core.errors.rules import (
    DEFAULT_RULES,
    RETRY_HINT_MESSAGE,
    UNKNOWN_OUTCOME,
    ClassificationRule,
    match_rule,
)
from core.errors.scheduling import Scheduler, ThreadingScheduler
from core.eventlog import TimeOrderedLog
from core.security.audit_log import SecurityAuditLog
from core.security.reporting import log_unauthorized_access
from core.time import Clock, SystemClock

logger = logging.getLogger("courtside.errors")

_TOAST_LEVELS = {
    ErrorSeverity.HIGH: ToastLevel.BLOCKING,
    ErrorSeverity.MEDIUM: ToastLevel.WARNING,
    ErrorSeverity.LOW: ToastLevel.INFO,
}

_SECURITY_KINDS = (ErrorKind.PERMISSION, ErrorKind.AUTHORIZATION)


class ErrorClassifier:
    """
    Central error sink for the console.

    Args:
        presenter: UI capability for modals and toasts.
        clock:     Time source for error timestamps and windows.
        audit_log: Security audit log for permission failures.
                   None disables security reporting.
        scheduler: Runs the delayed retry hint.
        settings:  Mode, retention and capacity.
        rules:     Ordered classification rules.
    """

    def __init__(
        self,
        presenter: Presenter,
        clock: Optional[Clock] = None,
        audit_log: Optional[SecurityAuditLog] = None,
        scheduler: Optional[Scheduler] = None,
        settings: Optional[GuardSettings] = None,
        rules: Tuple[ClassificationRule, ...] = DEFAULT_RULES,
    ) -> None:
        self._presenter = presenter
        self._clock = clock or SystemClock()
        self._audit_log = audit_log
        self._scheduler = scheduler or ThreadingScheduler()
        self._settings = settings or GuardSettings()
        self._rules = rules
        self._errors: TimeOrderedLog[AppError] = TimeOrderedLog(
            timestamp_of=lambda e: e.timestamp,
            capacity=self._settings.error_log_capacity,
        )

    @property
    def settings(self) -> GuardSettings:
        return self._settings

    # ══════════════════════════════════════════════════════════
    # CLASSIFY
    # ══════════════════════════════════════════════════════════

    def classify(self, fault: Any, context: Any = None) -> AppError:
        try:
            app_error = self._build(fault, context)
        except Exception as exc:
            logger.error(f"Classification failed, recording as unknown: {exc}", exc_info=True)
            app_error = self._fallback(fault)

        self._errors.append(app_error)
        self._log(app_error)
        return app_error

    def _build(self, fault: Any, context: Any) -> AppError:
        fault_context = FaultContext.coerce(context)
        view = FaultView.of(fault)
        rule_name, outcome = match_rule(view, self._rules)
        return AppError(
            kind=outcome.kind,
            severity=outcome.severity,
            user_message=outcome.user_message,
            context=ErrorContext.stamp(fault_context, self._clock.now_utc()),
            internal_message=view.message or "Unknown error",
            code=view.code if rule_name == "backend_code" else None,
            retryable=outcome.retryable,
            silent=outcome.silent,
        )

    def _fallback(self, fault: Any) -> AppError:
        try:
            internal = str(fault)
        except Exception:
            internal = f"<unprintable {type(fault).__name__}>"
        return AppError(
            kind=UNKNOWN_OUTCOME.kind,
            severity=UNKNOWN_OUTCOME.severity,
            user_message=UNKNOWN_OUTCOME.user_message,
            context=ErrorContext(timestamp=self._safe_now()),
            internal_message=internal or "Unknown error",
            retryable=True,
            silent=True,
        )

    def _safe_now(self):
        try:
            return self._clock.now_utc()
        except Exception:
            # keep the log ordered even when the clock is the failure
            return self._errors.last_timestamp() or SystemClock().now_utc()

    def _log(self, app_error: AppError) -> None:
        if self._settings.mode.verbose:
            logger.info(
                f"[{app_error.severity.value.upper()}] {app_error.kind.value}: "
                f"{app_error.internal_message} | user: {app_error.user_message} "
                f"| context: {app_error.context.to_dict()}"
            )
        elif app_error.severity >= ErrorSeverity.HIGH:
            logger.error(f"[ERROR] {app_error.to_redacted_dict()}")

    # ══════════════════════════════════════════════════════════
    # DISPATCH
    # ══════════════════════════════════════════════════════════

    def dispatch(self, app_error: AppError) -> None:
        if app_error.silent:
            return

        try:
            if app_error.severity is ErrorSeverity.CRITICAL:
                self._presenter.show_modal(app_error.user_message)
            else:
                self._presenter.show_toast(
                    _TOAST_LEVELS[app_error.severity], app_error.user_message
                )
        except Exception as exc:
            logger.error(f"Presenter failed for {app_error.kind.value} error: {exc}", exc_info=True)

        if app_error.severity is ErrorSeverity.HIGH:
            self._report_security(app_error)

        if app_error.retryable:
            try:
                self._scheduler.call_later(
                    self._settings.retry_hint_delay_seconds,
                    self._show_retry_hint,
                )
            except Exception as exc:
                logger.error(
                    f"Retry hint scheduling failed for {app_error.kind.value} error: {exc}",
                    exc_info=True,
                )

    def _report_security(self, app_error: AppError) -> None:
        ctx = app_error.context
        if self._audit_log is None or app_error.kind not in _SECURITY_KINDS:
            return
        if not (ctx.actor_id and ctx.actor_role):
            return
        try:
            log_unauthorized_access(
                self._audit_log,
                ctx.actor_id,
                ctx.actor_role,
                ctx.resource or "unknown",
            )
        except Exception as exc:
            logger.error(f"Security report failed: {exc}", exc_info=True)

    def _show_retry_hint(self) -> None:
        self._presenter.show_toast(ToastLevel.INFO, RETRY_HINT_MESSAGE)

    def handle(self, fault: Any, context: Any = None) -> AppError:
        """Classify, then dispatch. The console's one-call entry point."""
        app_error = self.classify(fault, context)
        self.dispatch(app_error)
        return app_error

    # ══════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════

    def get_error_stats(self, window_hours: float = 24) -> ErrorStats:
        recent = self._recent(window_hours)
        return ErrorStats(
            total=len(recent),
            by_kind=dict(Counter(e.kind.value for e in recent)),
            by_severity=dict(Counter(e.severity.value for e in recent)),
            critical=sum(1 for e in recent if e.severity is ErrorSeverity.CRITICAL),
            retryable=sum(1 for e in recent if e.retryable),
        )

    def critical_badge(self, window_hours: float = 1) -> ErrorBadge:
        recent = self._recent(window_hours)
        return ErrorBadge(
            count=sum(1 for e in recent if e.severity is ErrorSeverity.CRITICAL)
        )

    def _recent(self, window_hours: float) -> Tuple[AppError, ...]:
        if window_hours < 0:
            raise ValueError("window_hours must be >= 0.")
        cutoff = self._clock.now_utc() - timedelta(hours=window_hours)
        return self._errors.since(cutoff)

    def snapshot(self) -> Tuple[AppError, ...]:
        return self._errors.snapshot()

    def __len__(self) -> int:
        return len(self._errors)

    # ══════════════════════════════════════════════════════════
    # RETENTION
    # ══════════════════════════════════════════════════════════

    def cleanup(self, retention_hours: Optional[float] = None) -> int:
        """Evict errors older than the retention window. Returns the count."""
        hours = self._settings.error_retention_hours if retention_hours is None else retention_hours
        if hours < 0:
            raise ValueError("retention_hours must be >= 0.")
        cutoff = self._clock.now_utc() - timedelta(hours=hours)
        removed = self._errors.evict_older_than(cutoff)
        logger.info(f"Error log cleanup removed {removed} entr{'y' if removed == 1 else 'ies'}")
        return removed
