"""
Courtside Core Security - Audit Models
========================================
Security events are frozen once recorded. The audit log is
append-only; the only removal is age-based bulk eviction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional


# ══════════════════════════════════════════════════════════════
# ENUMS
# ══════════════════════════════════════════════════════════════

class SecurityEventType(Enum):
    PERMISSION_DENIED = "permission_denied"
    UNAUTHORIZED_ACCESS = "unauthorized_access"
    DATA_ACCESS_VIOLATION = "data_access_violation"
    PRIVILEGE_ESCALATION_ATTEMPT = "privilege_escalation_attempt"
    SUSPICIOUS_ACTIVITY = "suspicious_activity"
    LOGIN_ATTEMPT = "login_attempt"
    PASSWORD_CHANGE = "password_change"
    ROLE_CHANGE = "role_change"
    PERMISSION_CHANGE = "permission_change"


class AccessResult(Enum):
    SUCCESS = "success"
    DENIED = "denied"
    ERROR = "error"


class RiskLevel(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def is_high(self) -> bool:
        return self in (RiskLevel.HIGH, RiskLevel.CRITICAL)


# ══════════════════════════════════════════════════════════════
# DETAILS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SecurityEventDetails:
    ip: Optional[str] = None
    user_agent: Optional[str] = None
    requested_permission: Optional[str] = None
    target_resource: Optional[str] = None
    reason: Optional[str] = None
    additional_context: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # detach from the caller's dict and make it read-only
        object.__setattr__(
            self,
            "additional_context",
            MappingProxyType(dict(self.additional_context)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ip": self.ip,
            "user_agent": self.user_agent,
            "requested_permission": self.requested_permission,
            "target_resource": self.target_resource,
            "reason": self.reason,
            "additional_context": dict(self.additional_context),
        }


# ══════════════════════════════════════════════════════════════
# EVENT INPUT / EVENT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SecurityEventInput:
    """What a collaborator reports; id and timestamp are assigned on record."""

    type: SecurityEventType
    actor_id: str
    actor_role: str
    action: str
    resource: str
    result: AccessResult
    risk_level: RiskLevel
    details: SecurityEventDetails = field(default_factory=SecurityEventDetails)

    def __post_init__(self) -> None:
        if not self.actor_id or not isinstance(self.actor_id, str):
            raise ValueError("actor_id must be a non-empty string.")
        if not isinstance(self.type, SecurityEventType):
            raise ValueError("type must be SecurityEventType.")
        if not isinstance(self.result, AccessResult):
            raise ValueError("result must be AccessResult.")
        if not isinstance(self.risk_level, RiskLevel):
            raise ValueError("risk_level must be RiskLevel.")
        if isinstance(self.actor_role, Enum):
            object.__setattr__(self, "actor_role", self.actor_role.value)


@dataclass(frozen=True)
class SecurityEvent:
    id: str
    timestamp: datetime
    type: SecurityEventType
    actor_id: str
    actor_role: str
    action: str
    resource: str
    result: AccessResult
    risk_level: RiskLevel
    details: SecurityEventDetails

    @classmethod
    def from_input(
        cls,
        event_input: SecurityEventInput,
        event_id: str,
        timestamp: datetime,
    ) -> "SecurityEvent":
        return cls(
            id=event_id,
            timestamp=timestamp,
            type=event_input.type,
            actor_id=event_input.actor_id,
            actor_role=event_input.actor_role,
            action=event_input.action,
            resource=event_input.resource,
            result=event_input.result,
            risk_level=event_input.risk_level,
            details=event_input.details,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "type": self.type.value,
            "actor_id": self.actor_id,
            "actor_role": self.actor_role,
            "action": self.action,
            "resource": self.resource,
            "result": self.result.value,
            "risk_level": self.risk_level.value,
            "details": self.details.to_dict(),
        }


# ══════════════════════════════════════════════════════════════
# QUERIES / AGGREGATES
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TimeRange:
    """Inclusive on both ends."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError("TimeRange start must not be after end.")


@dataclass(frozen=True)
class SecurityStats:
    total: int = 0
    by_type: Dict[str, int] = field(default_factory=dict)
    by_risk: Dict[str, int] = field(default_factory=dict)
    by_actor: Dict[str, int] = field(default_factory=dict)
    denied_attempts: int = 0
    suspicious_activity_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "by_type": dict(self.by_type),
            "by_risk": dict(self.by_risk),
            "by_actor": dict(self.by_actor),
            "denied_attempts": self.denied_attempts,
            "suspicious_activity_count": self.suspicious_activity_count,
        }
