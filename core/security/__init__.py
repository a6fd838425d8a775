"""
Courtside Core Security - Public API
======================================
Security audit trail, suspicious-actor detection and the
reporting helpers used by the error dispatcher and route guards.
"""

from core.security.anomaly_detection import DenialWindowDetector, SuspicionResult
from core.security.audit_log import SecurityAuditLog, log_critical_event
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
from core.security.reporting import (
    log_data_access_violation,
    log_permission_denied,
    log_unauthorized_access,
)
from core.security.roles import UserRole

__all__ = [
    # Models
    "SecurityEventType",
    "AccessResult",
    "RiskLevel",
    "SecurityEventDetails",
    "SecurityEventInput",
    "SecurityEvent",
    "SecurityStats",
    "TimeRange",
    "UserRole",
    # Audit log
    "SecurityAuditLog",
    "log_critical_event",
    # Detection
    "DenialWindowDetector",
    "SuspicionResult",
    # Reporting
    "log_permission_denied",
    "log_unauthorized_access",
    "log_data_access_violation",
]
