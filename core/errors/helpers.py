"""
Courtside Core Errors - Convenience Entry Points
==================================================
Shapes the common console call sites (API calls, form fields,
uploads) into a fault and context before handing them to the
classifier.
"""

from __future__ import annotations

from typing import Any, Optional

from core.errors.classifier import ErrorClassifier
from core.errors.faults import ValidationFault
from core.errors.models import AppError, FaultContext


def handle_api_error(
    classifier: ErrorClassifier,
    fault: Any,
    action: str,
    actor_id: Optional[str] = None,
    actor_role: Optional[str] = None,
) -> AppError:
    return classifier.handle(
        fault,
        FaultContext.coerce({
            "action": action,
            "actor_id": actor_id,
            "actor_role": actor_role,
            "resource": "api",
        }),
    )


def handle_validation_error(
    classifier: ErrorClassifier,
    field: str,
    message: str,
) -> AppError:
    return classifier.handle(ValidationFault(f"{field}: {message}", field=field))


def handle_file_error(
    classifier: ErrorClassifier,
    file_name: str,
    error: str,
) -> AppError:
    """`error` is the short reason, e.g. "size" or "type"."""
    return classifier.handle(
        ValidationFault(f"file_{error}", field=file_name),
        FaultContext(action="file_upload", resource=file_name),
    )
