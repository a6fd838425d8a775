"""
Courtside Core Errors - Faults
================================
Faults arrive from collaborators in many shapes: exceptions raised
by the backend client, decoded JSON error bodies, plain strings.
FaultView reads the few attributes classification needs without
assuming any particular shape.

The exception types below are what first-party code raises when it
wants a specific classification.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

_MAX_CAUSE_DEPTH = 8


# ══════════════════════════════════════════════════════════════
# FIRST-PARTY FAULTS
# ══════════════════════════════════════════════════════════════

class BackendFault(Exception):
    """Error returned by the hosted database API (PostgREST / Postgres)."""

    def __init__(
        self,
        code: str,
        message: str = "",
        details: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.code = code
        self.message = message
        self.details = details
        self.hint = hint
        super().__init__(f"[{code}] {message}" if message else code)


class ValidationFault(Exception):
    """Form or payload validation failure."""

    name = "ValidationError"

    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(message)


class NetworkFault(ConnectionError):
    """Transport failure reaching the backend."""

    name = "NetworkError"


# ══════════════════════════════════════════════════════════════
# FAULT VIEW
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class FaultView:
    code: Optional[str]
    message: str
    name: str
    is_connection_error: bool = False
    is_validation_fault: bool = False

    @property
    def lowered(self) -> str:
        return self.message.lower()

    @classmethod
    def of(cls, fault: Any) -> "FaultView":
        code = _read(fault, "code")
        message = _message_of(fault)
        name = _read(fault, "name")
        if name is None and fault is not None and not isinstance(fault, (str, Mapping)):
            name = type(fault).__name__

        if code is None:
            code = _code_from_causes(fault)

        return cls(
            code=_as_code(code),
            message=message,
            name=str(name or ""),
            is_connection_error=isinstance(fault, ConnectionError),
            is_validation_fault=isinstance(fault, ValidationFault),
        )


def _read(fault: Any, key: str) -> Any:
    if fault is None or isinstance(fault, str):
        return None
    if isinstance(fault, Mapping):
        return fault.get(key)
    return getattr(fault, key, None)


def _message_of(fault: Any) -> str:
    if fault is None:
        return ""
    if isinstance(fault, str):
        return fault
    message = _read(fault, "message")
    if isinstance(message, str) and message:
        return message
    if isinstance(fault, BaseException):
        return str(fault)
    return ""


def _as_code(code: Any) -> Optional[str]:
    if code is None or isinstance(code, bool):
        return None
    text = str(code).strip()
    return text or None


def _cause_of(fault: Any) -> Any:
    # explicit causes only; __context__ is whatever was being handled
    if isinstance(fault, BaseException):
        if fault.__cause__ is not None:
            return fault.__cause__
        return getattr(fault, "cause", None)
    return _read(fault, "cause")


def _code_from_causes(fault: Any) -> Any:
    seen = {id(fault)}
    current = _cause_of(fault)
    depth = 0
    while current is not None and depth < _MAX_CAUSE_DEPTH and id(current) not in seen:
        seen.add(id(current))
        code = _read(current, "code")
        if _as_code(code) is not None:
            return code
        current = _cause_of(current)
        depth += 1
    return None
