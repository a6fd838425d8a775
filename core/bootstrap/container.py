"""
Courtside Bootstrap - Service Container
=========================================
Builds the guard components once, wired to each other:

    SecurityAuditLog  <- ErrorClassifier (permission failures)
    BufferedPresenter <- ErrorClassifier (modals, toasts)

and owns the two maintenance timers (error-log cleanup, audit-log
cleanup). Nothing here is a module global; the Django adapter
keeps one container per process.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from core.config.guard_settings import GuardSettings, load_guard_settings
from core.errors.classifier import ErrorClassifier
from core.errors.presenter import BufferedPresenter, Presenter
from core.errors.scheduling import PeriodicTask, Scheduler, ThreadingScheduler
from core.security.audit_log import HighRiskHandler, SecurityAuditLog, log_critical_event
from core.time import Clock, SystemClock

logger = logging.getLogger("courtside.bootstrap")


@dataclass
class GuardServices:
    settings: GuardSettings
    clock: Clock
    presenter: Presenter
    audit_log: SecurityAuditLog
    classifier: ErrorClassifier
    _maintenance: List[PeriodicTask] = field(default_factory=list, repr=False)

    def maintenance_tasks(self) -> Tuple[PeriodicTask, ...]:
        return (
            PeriodicTask(
                "error-log-cleanup",
                self.settings.error_cleanup_interval_seconds,
                self.classifier.cleanup,
            ),
            PeriodicTask(
                "security-audit-cleanup",
                self.settings.audit_cleanup_interval_seconds,
                self.audit_log.cleanup,
            ),
        )

    def start_maintenance(self) -> Tuple[PeriodicTask, ...]:
        if self._maintenance:
            return tuple(self._maintenance)
        self._maintenance = list(self.maintenance_tasks())
        for task in self._maintenance:
            task.start()
        return tuple(self._maintenance)

    def stop_maintenance(self) -> None:
        for task in self._maintenance:
            task.stop()
        self._maintenance = []


def build_guard_services(
    settings: Optional[GuardSettings] = None,
    clock: Optional[Clock] = None,
    presenter: Optional[Presenter] = None,
    scheduler: Optional[Scheduler] = None,
    high_risk_handler: Optional[HighRiskHandler] = None,
) -> GuardServices:
    """Wire a complete set of guard services. Arguments override defaults."""
    settings = settings or load_guard_settings()
    clock = clock or SystemClock()
    presenter = presenter or BufferedPresenter()

    audit_log = SecurityAuditLog(
        clock=clock,
        settings=settings,
        high_risk_handler=high_risk_handler or log_critical_event,
    )
    classifier = ErrorClassifier(
        presenter=presenter,
        clock=clock,
        audit_log=audit_log,
        scheduler=scheduler or ThreadingScheduler(),
        settings=settings,
    )

    logger.info(f"Guard services built (mode={settings.mode.value})")
    return GuardServices(
        settings=settings,
        clock=clock,
        presenter=presenter,
        audit_log=audit_log,
        classifier=classifier,
    )
