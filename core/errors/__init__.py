"""
Courtside Core Errors - Public API
====================================
Fault classification, user-facing dispatch, error statistics
and the process-wide hooks that feed them.
"""

from core.errors.classifier import ErrorClassifier
from core.errors.faults import BackendFault, FaultView, NetworkFault, ValidationFault
from core.errors.global_hooks import GlobalErrorHandling, install_global_error_handling
from core.errors.helpers import handle_api_error, handle_file_error, handle_validation_error
from core.errors.models import (
    AppError,
    ErrorBadge,
    ErrorContext,
    ErrorKind,
    ErrorSeverity,
    ErrorStats,
    FaultContext,
)
from core.errors.presenter import (
    BufferedPresenter,
    LoggingPresenter,
    Presentation,
    Presenter,
    ToastLevel,
)
from core.errors.rules import DEFAULT_RULES, ClassificationRule, Outcome, match_rule
from core.errors.scheduling import ManualScheduler, PeriodicTask, Scheduler, ThreadingScheduler

__all__ = [
    # Models
    "ErrorKind",
    "ErrorSeverity",
    "FaultContext",
    "ErrorContext",
    "AppError",
    "ErrorStats",
    "ErrorBadge",
    # Faults
    "BackendFault",
    "ValidationFault",
    "NetworkFault",
    "FaultView",
    # Rules
    "Outcome",
    "ClassificationRule",
    "DEFAULT_RULES",
    "match_rule",
    # Classifier
    "ErrorClassifier",
    "handle_api_error",
    "handle_validation_error",
    "handle_file_error",
    # Presentation
    "Presenter",
    "ToastLevel",
    "Presentation",
    "LoggingPresenter",
    "BufferedPresenter",
    # Scheduling
    "Scheduler",
    "ThreadingScheduler",
    "ManualScheduler",
    "PeriodicTask",
    # Hooks
    "GlobalErrorHandling",
    "install_global_error_handling",
]
