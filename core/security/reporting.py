"""
Courtside Core Security - Reporting Helpers
=============================================
Shorthand for the three security events the console reports most:
permission denials, unauthorized route/resource access and data
reads outside the actor's scope. All record a DENIED result.
"""

from __future__ import annotations

from typing import Optional, Union

from core.security.audit_log import SecurityAuditLog
from core.security.models import (
    AccessResult,
    RiskLevel,
    SecurityEvent,
    SecurityEventDetails,
    SecurityEventInput,
    SecurityEventType,
)
from core.security.roles import UserRole

RoleLike = Union[UserRole, str]


def _role(role: RoleLike) -> str:
    return role.value if isinstance(role, UserRole) else str(role)


def log_permission_denied(
    audit_log: SecurityAuditLog,
    actor_id: str,
    actor_role: RoleLike,
    permission: str,
    resource: str,
    reason: Optional[str] = None,
) -> SecurityEvent:
    return audit_log.record(
        SecurityEventInput(
            type=SecurityEventType.PERMISSION_DENIED,
            actor_id=actor_id,
            actor_role=_role(actor_role),
            action=f"access_{permission}",
            resource=resource,
            result=AccessResult.DENIED,
            risk_level=RiskLevel.MEDIUM,
            details=SecurityEventDetails(
                requested_permission=permission,
                reason=reason,
            ),
        )
    )


def log_unauthorized_access(
    audit_log: SecurityAuditLog,
    actor_id: str,
    actor_role: RoleLike,
    attempted_resource: str,
    ip: Optional[str] = None,
) -> SecurityEvent:
    return audit_log.record(
        SecurityEventInput(
            type=SecurityEventType.UNAUTHORIZED_ACCESS,
            actor_id=actor_id,
            actor_role=_role(actor_role),
            action="access_attempt",
            resource=attempted_resource,
            result=AccessResult.DENIED,
            risk_level=RiskLevel.HIGH,
            details=SecurityEventDetails(
                ip=ip,
                target_resource=attempted_resource,
            ),
        )
    )


def log_data_access_violation(
    audit_log: SecurityAuditLog,
    actor_id: str,
    actor_role: RoleLike,
    data_type: str,
    attempted_action: str,
) -> SecurityEvent:
    return audit_log.record(
        SecurityEventInput(
            type=SecurityEventType.DATA_ACCESS_VIOLATION,
            actor_id=actor_id,
            actor_role=_role(actor_role),
            action=attempted_action,
            resource=data_type,
            result=AccessResult.DENIED,
            risk_level=RiskLevel.HIGH,
            details=SecurityEventDetails(
                reason="data access outside permitted scope",
            ),
        )
    )
