"""
Courtside Django Adapter Views
==============================
Pass-through HTTP views over core/http_api handlers.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from django.http import HttpRequest, JsonResponse
from django.utils.dateparse import parse_datetime
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from adapters.django_api.wiring import build_services
from core.http_api.contracts import (
    ActorDetectRequest,
    ActorEventsRequest,
    StatsWindowRequest,
    TimeRangeRequest,
)
from core.http_api.errors import INVALID_REQUEST, error_response
from core.http_api.handlers import (
    get_error_badge,
    get_error_stats,
    get_security_stats,
    list_actor_events,
    post_actor_detect,
    post_notifications_drain,
)


def _json_error(code: str, message: str, status: int = 400) -> JsonResponse:
    return JsonResponse(
        error_response(code=code, message=message, details={}),
        status=status,
    )


def _json_envelope(payload: dict[str, Any]) -> JsonResponse:
    return JsonResponse(payload, status=200 if payload.get("ok") else 500)


def _parse_number(raw: Any, field_name: str, default: float) -> float:
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{field_name} must be a number.") from exc


def _parse_int(raw: Any, field_name: str, default: int) -> int:
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{field_name} must be an integer.") from exc


def _parse_iso(raw: Any, field_name: str) -> datetime | None:
    if raw is None or raw == "":
        return None
    try:
        value = parse_datetime(str(raw))
    except ValueError as exc:
        raise ValueError(f"{field_name} must be an ISO-8601 datetime.") from exc
    if value is None:
        raise ValueError(f"{field_name} must be an ISO-8601 datetime.")
    return value


def _dispatch_window(handler, request: HttpRequest, default_hours: float) -> JsonResponse:
    try:
        contract = StatsWindowRequest(
            hours=_parse_number(request.GET.get("hours"), "hours", default_hours)
        )
    except ValueError as exc:
        return _json_error(INVALID_REQUEST, str(exc), status=400)
    return _json_envelope(handler(contract, build_services()))


# ══════════════════════════════════════════════════════════════
# ERRORS
# ══════════════════════════════════════════════════════════════

@require_GET
def error_stats_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_window(get_error_stats, request, default_hours=24)


@require_GET
def error_badge_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_window(get_error_badge, request, default_hours=1)


# ══════════════════════════════════════════════════════════════
# SECURITY
# ══════════════════════════════════════════════════════════════

@require_GET
def security_stats_view(request: HttpRequest) -> JsonResponse:
    try:
        contract = TimeRangeRequest(
            start=_parse_iso(request.GET.get("start"), "start"),
            end=_parse_iso(request.GET.get("end"), "end"),
        )
    except ValueError as exc:
        return _json_error(INVALID_REQUEST, str(exc), status=400)
    return _json_envelope(get_security_stats(contract, build_services()))


@require_GET
def actor_events_view(request: HttpRequest, actor_id: str) -> JsonResponse:
    try:
        contract = ActorEventsRequest(
            actor_id=actor_id,
            limit=_parse_int(request.GET.get("limit"), "limit", 50),
        )
    except ValueError as exc:
        return _json_error(INVALID_REQUEST, str(exc), status=400)
    return _json_envelope(list_actor_events(contract, build_services()))


@csrf_exempt
@require_POST
def actor_detect_view(request: HttpRequest, actor_id: str) -> JsonResponse:
    try:
        contract = ActorDetectRequest(actor_id=actor_id)
    except ValueError as exc:
        return _json_error(INVALID_REQUEST, str(exc), status=400)
    return _json_envelope(post_actor_detect(contract, build_services()))


# ══════════════════════════════════════════════════════════════
# NOTIFICATIONS
# ══════════════════════════════════════════════════════════════

@csrf_exempt
@require_POST
def notifications_drain_view(request: HttpRequest) -> JsonResponse:
    return _json_envelope(post_notifications_drain(build_services()))
