"""
Courtside HTTP API - Framework-Agnostic Handlers
================================================
Pure handler functions over contracts and the guard services.

Every handler returns the JSON envelope; none raises for a read
failure. Internal error messages never leave through this layer,
only counts, user-facing text and security event records.
"""

from __future__ import annotations

from typing import Any

from core.bootstrap.container import GuardServices
from core.http_api.contracts import (
    ActorDetectRequest,
    ActorEventsRequest,
    StatsWindowRequest,
    TimeRangeRequest,
)
from core.http_api.errors import error_response, read_failure, success_response
from core.security.models import TimeRange


# ══════════════════════════════════════════════════════════════
# ERRORS
# ══════════════════════════════════════════════════════════════

def get_error_stats(
    request: StatsWindowRequest,
    services: GuardServices,
) -> dict[str, Any]:
    try:
        stats = services.classifier.get_error_stats(request.hours)
    except Exception as exc:
        return read_failure("error statistics", exc)
    return success_response({"window_hours": request.hours, **stats.to_dict()})


def get_error_badge(
    request: StatsWindowRequest,
    services: GuardServices,
) -> dict[str, Any]:
    try:
        badge = services.classifier.critical_badge(request.hours)
    except Exception as exc:
        return read_failure("critical error badge", exc)
    return success_response({"window_hours": request.hours, **badge.to_dict()})


# ══════════════════════════════════════════════════════════════
# SECURITY
# ══════════════════════════════════════════════════════════════

def get_security_stats(
    request: TimeRangeRequest,
    services: GuardServices,
) -> dict[str, Any]:
    time_range = (
        TimeRange(start=request.start, end=request.end)
        if request.is_bounded
        else None
    )
    try:
        stats = services.audit_log.get_stats(time_range)
    except Exception as exc:
        return read_failure("security statistics", exc)

    data = stats.to_dict()
    data["range"] = (
        {"start": request.start.isoformat(), "end": request.end.isoformat()}
        if request.is_bounded
        else None
    )
    return success_response(data)


def list_actor_events(
    request: ActorEventsRequest,
    services: GuardServices,
) -> dict[str, Any]:
    try:
        events = services.audit_log.recent_events_for_actor(
            request.actor_id, request.limit
        )
    except Exception as exc:
        return read_failure("actor events", exc)
    return success_response(
        {
            "actor_id": request.actor_id,
            "items": [event.to_dict() for event in events],
            "count": len(events),
        }
    )


def post_actor_detect(
    request: ActorDetectRequest,
    services: GuardServices,
) -> dict[str, Any]:
    try:
        suspicious = services.audit_log.detect_suspicious(request.actor_id)
    except Exception as exc:
        return read_failure("actor activity", exc)
    return success_response({"actor_id": request.actor_id, "suspicious": suspicious})


# ══════════════════════════════════════════════════════════════
# NOTIFICATIONS
# ══════════════════════════════════════════════════════════════

def post_notifications_drain(services: GuardServices) -> dict[str, Any]:
    drain = getattr(services.presenter, "drain", None)
    if not callable(drain):
        return error_response(
            code="PRESENTER_NOT_BUFFERED",
            message="The configured presenter does not queue notifications.",
            details={"presenter": type(services.presenter).__name__},
        )
    items = drain()
    return success_response(
        {
            "items": [item.to_dict() for item in items],
            "count": len(items),
        }
    )
