"""
Courtside HTTP API - Public API
===============================
"""

from core.http_api.contracts import (
    ActorDetectRequest,
    ActorEventsRequest,
    HttpApiErrorBody,
    HttpApiResponse,
    StatsWindowRequest,
    TimeRangeRequest,
)
from core.http_api.errors import error_response, success_response
from core.http_api.handlers import (
    get_error_badge,
    get_error_stats,
    get_security_stats,
    list_actor_events,
    post_actor_detect,
    post_notifications_drain,
)

__all__ = [
    "StatsWindowRequest",
    "TimeRangeRequest",
    "ActorEventsRequest",
    "ActorDetectRequest",
    "HttpApiErrorBody",
    "HttpApiResponse",
    "error_response",
    "success_response",
    "get_error_stats",
    "get_error_badge",
    "get_security_stats",
    "list_actor_events",
    "post_actor_detect",
    "post_notifications_drain",
]
