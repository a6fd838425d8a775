"""
Courtside Core Errors - Models
================================
Typed, immutable result of classifying a fault.

An AppError is created once per fault by the classifier, appended
to the error log and never modified afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional


# ══════════════════════════════════════════════════════════════
# ENUMS
# ══════════════════════════════════════════════════════════════

class ErrorKind(Enum):
    NETWORK = "network"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    VALIDATION = "validation"
    DATABASE = "database"
    FILE_UPLOAD = "file_upload"
    PERMISSION = "permission"
    BUSINESS_LOGIC = "business_logic"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"


_SEVERITY_RANK = {"low": 1, "medium": 2, "high": 3, "critical": 4}


class ErrorSeverity(Enum):
    """Totally ordered: LOW < MEDIUM < HIGH < CRITICAL."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self.value]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ErrorSeverity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, ErrorSeverity):
            return NotImplemented
        return self.rank <= other.rank


# ══════════════════════════════════════════════════════════════
# CONTEXT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class FaultContext:
    """Partial context a collaborator supplies with a fault."""

    actor_id: Optional[str] = None
    actor_role: Optional[str] = None
    action: Optional[str] = None
    resource: Optional[str] = None

    @classmethod
    def coerce(cls, raw: Any) -> "FaultContext":
        """Accept a FaultContext, a mapping with the same keys, or None."""
        if raw is None:
            return cls()
        if isinstance(raw, FaultContext):
            return raw
        if isinstance(raw, Mapping):
            return cls(
                actor_id=_opt_str(raw.get("actor_id")),
                actor_role=_opt_str(raw.get("actor_role")),
                action=_opt_str(raw.get("action")),
                resource=_opt_str(raw.get("resource")),
            )
        raise TypeError(f"Unsupported context type: {type(raw).__name__}")

    def with_action(self, action: str) -> "FaultContext":
        return FaultContext(
            actor_id=self.actor_id,
            actor_role=self.actor_role,
            action=action,
            resource=self.resource,
        )


def _opt_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, Enum):
        value = value.value
    return str(value)


@dataclass(frozen=True)
class ErrorContext:
    """FaultContext stamped with the classification time."""

    timestamp: datetime
    actor_id: Optional[str] = None
    actor_role: Optional[str] = None
    action: Optional[str] = None
    resource: Optional[str] = None

    @classmethod
    def stamp(cls, context: FaultContext, timestamp: datetime) -> "ErrorContext":
        return cls(
            timestamp=timestamp,
            actor_id=context.actor_id,
            actor_role=context.actor_role,
            action=context.action,
            resource=context.resource,
        )

    def to_dict(self, redact_actor: bool = False) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "actor_id": None if redact_actor else self.actor_id,
            "actor_role": self.actor_role,
            "action": self.action,
            "resource": self.resource,
        }


# ══════════════════════════════════════════════════════════════
# APP ERROR
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class AppError:
    kind: ErrorKind
    severity: ErrorSeverity
    user_message: str
    context: ErrorContext
    internal_message: str = ""
    code: Optional[str] = None
    retryable: bool = False
    silent: bool = False

    def __post_init__(self) -> None:
        if not self.user_message:
            raise ValueError("AppError.user_message must be non-empty.")

    @property
    def timestamp(self) -> datetime:
        return self.context.timestamp

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "severity": self.severity.value,
            "code": self.code,
            "internal_message": self.internal_message,
            "user_message": self.user_message,
            "context": self.context.to_dict(),
            "retryable": self.retryable,
            "silent": self.silent,
        }

    def to_redacted_dict(self) -> Dict[str, Any]:
        """Production log shape: no internal message, no actor id."""
        return {
            "kind": self.kind.value,
            "severity": self.severity.value,
            "code": self.code,
            "context": self.context.to_dict(redact_actor=True),
        }


# ══════════════════════════════════════════════════════════════
# AGGREGATES
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ErrorStats:
    total: int = 0
    by_kind: Dict[str, int] = field(default_factory=dict)
    by_severity: Dict[str, int] = field(default_factory=dict)
    critical: int = 0
    retryable: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "by_kind": dict(self.by_kind),
            "by_severity": dict(self.by_severity),
            "critical": self.critical,
            "retryable": self.retryable,
        }


@dataclass(frozen=True)
class ErrorBadge:
    """Header badge: count of critical errors in a short window."""

    count: int

    @property
    def label(self) -> str:
        if self.count <= 0:
            return ""
        return "9+" if self.count > 9 else str(self.count)

    def to_dict(self) -> Dict[str, Any]:
        return {"count": self.count, "label": self.label}
