"""
Courtside Core Errors - Classification Rules
==============================================
The classification policy as data: an ordered tuple of rules,
evaluated first-match-wins against a FaultView.

Order:
1. Backend error code (fixed code table, then a generic default)
2. Network failure pattern
3. Permission / authorization wording
4. Validation tag (user message from the phrase table)
Anything unmatched falls to UNKNOWN_OUTCOME.

User messages here are shown to end users. They must never
contain codes, stack data or actor identifiers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from core.errors.faults import FaultView
from core.errors.models import ErrorKind, ErrorSeverity


# ══════════════════════════════════════════════════════════════
# OUTCOME
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Outcome:
    kind: ErrorKind
    severity: ErrorSeverity
    user_message: str
    retryable: bool
    silent: bool = False


@dataclass(frozen=True)
class ClassificationRule:
    name: str
    applies: Callable[[FaultView], bool]
    outcome_for: Callable[[FaultView], Outcome]


# ══════════════════════════════════════════════════════════════
# BACKEND CODE TABLE
# ══════════════════════════════════════════════════════════════

BACKEND_CODE_OUTCOMES: Dict[str, Outcome] = {
    # duplicate key
    "PGRST301": Outcome(
        kind=ErrorKind.VALIDATION,
        severity=ErrorSeverity.MEDIUM,
        user_message="This record already exists. Please try a different value.",
        retryable=False,
    ),
    # row-level security denied the request
    "PGRST116": Outcome(
        kind=ErrorKind.AUTHORIZATION,
        severity=ErrorSeverity.HIGH,
        user_message="You do not have permission to perform this action.",
        retryable=False,
    ),
    # unique_violation
    "23505": Outcome(
        kind=ErrorKind.VALIDATION,
        severity=ErrorSeverity.MEDIUM,
        user_message="A duplicate value already exists. Please enter a different value.",
        retryable=False,
    ),
    # foreign_key_violation
    "23503": Outcome(
        kind=ErrorKind.VALIDATION,
        severity=ErrorSeverity.MEDIUM,
        user_message="The related record could not be found, so the action cannot be completed.",
        retryable=False,
    ),
    # undefined_table
    "42P01": Outcome(
        kind=ErrorKind.DATABASE,
        severity=ErrorSeverity.CRITICAL,
        user_message="A system error occurred. Please contact an administrator.",
        retryable=False,
    ),
}

DEFAULT_BACKEND_OUTCOME = Outcome(
    kind=ErrorKind.DATABASE,
    severity=ErrorSeverity.MEDIUM,
    user_message="A database error occurred. Please try again shortly.",
    retryable=True,
)


# ══════════════════════════════════════════════════════════════
# MESSAGE PATTERNS
# ══════════════════════════════════════════════════════════════

NETWORK_PATTERNS: Tuple[str, ...] = (
    "fetch",
    "networkerror",
    "network error",
    "connection refused",
    "connection reset",
)

PERMISSION_PATTERNS: Tuple[str, ...] = (
    "permission",
    "authoriz",
)

# Ordered: the first keyword found in the lowered message wins.
VALIDATION_PHRASES: Tuple[Tuple[str, str], ...] = (
    ("required", "This field is required."),
    ("email", "Please enter a valid email address."),
    ("password", "Passwords must be at least 8 characters long."),
    ("phone", "Please enter a valid phone number."),
    ("date", "Please choose a valid date."),
    ("number", "Only numbers are allowed."),
    ("min_length", "Please check the minimum length."),
    ("max_length", "The maximum length was exceeded."),
    ("file_size", "The file is too large (5MB maximum)."),
    ("file_type", "This file type is not supported."),
)

DEFAULT_VALIDATION_MESSAGE = "Please check your input."

NETWORK_OUTCOME = Outcome(
    kind=ErrorKind.NETWORK,
    severity=ErrorSeverity.LOW,
    user_message="A temporary problem occurred. Please try again shortly.",
    retryable=True,
    silent=True,
)

PERMISSION_OUTCOME = Outcome(
    kind=ErrorKind.PERMISSION,
    severity=ErrorSeverity.HIGH,
    user_message="You do not have access to this feature. Please contact an administrator.",
    retryable=False,
)

UNKNOWN_OUTCOME = Outcome(
    kind=ErrorKind.UNKNOWN,
    severity=ErrorSeverity.LOW,
    user_message="An unexpected error occurred. Please try again shortly.",
    retryable=True,
    silent=True,
)

RETRY_HINT_MESSAGE = "Please try again in a moment."


def resolve_validation_message(message: str) -> str:
    """Pick the user-facing phrase for a validation failure message."""
    lowered = (message or "").lower()
    for keyword, phrase in VALIDATION_PHRASES:
        if keyword in lowered:
            return phrase
    return DEFAULT_VALIDATION_MESSAGE


def _mentions(patterns: Tuple[str, ...]) -> Callable[[FaultView], bool]:
    def check(view: FaultView) -> bool:
        text = view.lowered
        return any(p in text for p in patterns)

    return check


def _is_network(view: FaultView) -> bool:
    return (
        view.name == "NetworkError"
        or view.is_connection_error
        or _mentions(NETWORK_PATTERNS)(view)
    )


def _is_validation(view: FaultView) -> bool:
    return (
        view.is_validation_fault
        or view.name == "ValidationError"
        or "validation" in view.lowered
    )


def _validation_outcome(view: FaultView) -> Outcome:
    return Outcome(
        kind=ErrorKind.VALIDATION,
        severity=ErrorSeverity.LOW,
        user_message=resolve_validation_message(view.message),
        retryable=False,
    )


DEFAULT_RULES: Tuple[ClassificationRule, ...] = (
    ClassificationRule(
        name="backend_code",
        applies=lambda view: view.code is not None,
        outcome_for=lambda view: BACKEND_CODE_OUTCOMES.get(view.code, DEFAULT_BACKEND_OUTCOME),
    ),
    ClassificationRule(
        name="network",
        applies=_is_network,
        outcome_for=lambda view: NETWORK_OUTCOME,
    ),
    ClassificationRule(
        name="permission",
        applies=_mentions(PERMISSION_PATTERNS),
        outcome_for=lambda view: PERMISSION_OUTCOME,
    ),
    ClassificationRule(
        name="validation",
        applies=_is_validation,
        outcome_for=_validation_outcome,
    ),
)


def match_rule(
    view: FaultView,
    rules: Tuple[ClassificationRule, ...] = DEFAULT_RULES,
) -> Tuple[Optional[str], Outcome]:
    """Return (rule name, outcome) for the first matching rule."""
    for rule in rules:
        if rule.applies(view):
            return rule.name, rule.outcome_for(view)
    return None, UNKNOWN_OUTCOME
