"""
Courtside HTTP API - Error Mapping
==================================
Stable transport envelope for dashboard handlers.
"""

from __future__ import annotations

from typing import Any, Optional

from core.http_api.contracts import HttpApiErrorBody, HttpApiResponse

INVALID_REQUEST = "INVALID_REQUEST"
READ_MODEL_ERROR = "READ_MODEL_ERROR"


def error_response(
    *,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(
        ok=False,
        error=HttpApiErrorBody(
            code=code,
            message=message,
            details=details or {},
        ),
    ).to_dict()


def success_response(data: Any) -> dict[str, Any]:
    return HttpApiResponse(ok=True, data=data).to_dict()


def read_failure(what: str, exc: Exception) -> dict[str, Any]:
    # only the exception type leaves the process
    return error_response(
        code=READ_MODEL_ERROR,
        message=f"Failed to read {what}.",
        details={"error_type": type(exc).__name__},
    )
