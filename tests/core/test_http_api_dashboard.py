"""
Tests — Dashboard HTTP API
============================
Framework-agnostic handlers and the Django views over them.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from adapters.django_api.wiring import install_services, reset_services
from core.bootstrap.container import build_guard_services
from core.config.guard_settings import GuardSettings
from core.errors.faults import BackendFault
from core.errors.presenter import LoggingPresenter
from core.errors.scheduling import ManualScheduler
from core.http_api.contracts import (
    ActorEventsRequest,
    StatsWindowRequest,
    TimeRangeRequest,
)
from core.http_api.handlers import (
    get_error_stats,
    get_security_stats,
    list_actor_events,
    post_notifications_drain,
)
from core.security.reporting import log_permission_denied
from core.time import FixedClock


T0 = datetime(2026, 3, 1, 9, 0, 0, tzinfo=timezone.utc)


def _services(presenter=None):
    return build_guard_services(
        settings=GuardSettings(),
        clock=FixedClock(T0),
        presenter=presenter,
        scheduler=ManualScheduler(),
    )


@pytest.fixture
def services():
    svc = _services()
    install_services(svc)
    yield svc
    reset_services()


# ══════════════════════════════════════════════════════════════
# CONTRACTS
# ══════════════════════════════════════════════════════════════

class TestContracts:
    @pytest.mark.parametrize("hours", [0, -1, True, "24", 24 * 366, float("nan"), float("inf")])
    def test_window_rejects_bad_hours(self, hours):
        with pytest.raises(ValueError):
            StatsWindowRequest(hours=hours)

    def test_time_range_requires_both_ends(self):
        with pytest.raises(ValueError):
            TimeRangeRequest(start=T0)

    def test_time_range_requires_aware_datetimes(self):
        with pytest.raises(ValueError):
            TimeRangeRequest(start=datetime(2026, 1, 1), end=datetime(2026, 1, 2))

    def test_actor_events_limit_bounds(self):
        with pytest.raises(ValueError):
            ActorEventsRequest(actor_id="u1", limit=0)
        with pytest.raises(ValueError):
            ActorEventsRequest(actor_id="", limit=5)


# ══════════════════════════════════════════════════════════════
# HANDLERS
# ══════════════════════════════════════════════════════════════

class TestHandlers:
    def test_error_stats_envelope(self):
        svc = _services()
        svc.classifier.handle(BackendFault("23505", "members_email_key"))
        payload = get_error_stats(StatsWindowRequest(hours=24), svc)
        assert payload["ok"] is True
        assert payload["data"]["total"] == 1
        assert payload["data"]["by_kind"] == {"validation": 1}
        assert payload["data"]["window_hours"] == 24
        assert "members_email_key" not in repr(payload)

    def test_security_stats_unbounded_and_bounded(self):
        svc = _services()
        log_permission_denied(svc.audit_log, "u1", "reception", "users.delete", "users")
        unbounded = get_security_stats(TimeRangeRequest(), svc)
        assert unbounded["data"]["total"] == 1
        assert unbounded["data"]["range"] is None

        later = TimeRangeRequest(start=T0 + timedelta(hours=1), end=T0 + timedelta(hours=2))
        bounded = get_security_stats(later, svc)
        assert bounded["data"]["total"] == 0
        assert bounded["data"]["range"]["start"] == later.start.isoformat()

    def test_actor_events(self):
        svc = _services()
        log_permission_denied(svc.audit_log, "u1", "reception", "users.delete", "users")
        payload = list_actor_events(ActorEventsRequest(actor_id="u1", limit=10), svc)
        assert payload["data"]["count"] == 1
        assert payload["data"]["items"][0]["action"] == "access_users.delete"

    def test_drain_requires_buffered_presenter(self):
        payload = post_notifications_drain(_services(presenter=LoggingPresenter()))
        assert payload["ok"] is False
        assert payload["error"]["code"] == "PRESENTER_NOT_BUFFERED"


# ══════════════════════════════════════════════════════════════
# DJANGO VIEWS
# ══════════════════════════════════════════════════════════════

class TestDjangoViews:
    def test_error_stats(self, client, services):
        services.classifier.handle(BackendFault("42P01", "relation courts missing"))
        response = client.get("/v1/errors/stats", {"hours": "24"})
        assert response.status_code == 200
        body = response.json()
        assert body == {
            "ok": True,
            "data": {
                "window_hours": 24.0,
                "total": 1,
                "by_kind": {"database": 1},
                "by_severity": {"critical": 1},
                "critical": 1,
                "retryable": 0,
            },
        }
        assert b"relation courts missing" not in response.content

    def test_error_stats_defaults_to_24_hours(self, client, services):
        body = client.get("/v1/errors/stats").json()
        assert body["data"]["window_hours"] == 24

    def test_invalid_hours(self, client, services):
        response = client.get("/v1/errors/stats", {"hours": "soon"})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_REQUEST"

    @pytest.mark.parametrize("hours", ["nan", "inf"])
    def test_non_finite_hours(self, client, services, hours):
        response = client.get("/v1/errors/badge", {"hours": hours})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_REQUEST"

    def test_badge(self, client, services):
        for _ in range(10):
            services.classifier.classify(BackendFault("42P01"))
        body = client.get("/v1/errors/badge").json()
        assert body["data"]["count"] == 10
        assert body["data"]["label"] == "9+"

    def test_security_stats_with_range(self, client, services):
        log_permission_denied(services.audit_log, "u1", "golf", "reports.view", "reports")
        response = client.get(
            "/v1/security/stats",
            {"start": T0.isoformat(), "end": (T0 + timedelta(hours=1)).isoformat()},
        )
        assert response.status_code == 200
        assert response.json()["data"]["denied_attempts"] == 1

    @pytest.mark.parametrize(
        "query",
        [
            {"start": "2026-03-01T00:00:00+00:00"},
            {"start": "yesterday", "end": "today"},
            {"start": "2026-03-01T00:00:00", "end": "2026-03-02T00:00:00"},
        ],
    )
    def test_security_stats_bad_range(self, client, services, query):
        response = client.get("/v1/security/stats", query)
        assert response.status_code == 400
        assert response.json()["ok"] is False

    def test_actor_events_and_detect(self, client, services):
        for _ in range(5):
            log_permission_denied(services.audit_log, "u7", "tennis", "courts.block", "courts")

        response = client.post("/v1/security/actors/u7/detect")
        assert response.status_code == 200
        assert response.json()["data"] == {"actor_id": "u7", "suspicious": True}

        limited = client.get("/v1/security/actors/u7/events", {"limit": "3"}).json()
        assert limited["data"]["count"] == 3

        events = client.get("/v1/security/actors/u7/events").json()
        assert events["data"]["count"] == 6
        types = [item["type"] for item in events["data"]["items"]]
        assert types.count("suspicious_activity") == 1

    def test_actor_events_bad_limit(self, client, services):
        response = client.get("/v1/security/actors/u7/events", {"limit": "lots"})
        assert response.status_code == 400

    def test_detect_requires_post(self, client, services):
        assert client.get("/v1/security/actors/u7/detect").status_code == 405

    def test_notifications_drain(self, client, services):
        services.classifier.handle(BackendFault("23505"))
        first = client.post("/v1/notifications/drain").json()
        assert first["data"]["count"] == 1
        assert first["data"]["items"][0] == {
            "surface": "toast",
            "level": "warning",
            "message": "A duplicate value already exists. Please enter a different value.",
        }
        second = client.post("/v1/notifications/drain").json()
        assert second["data"]["count"] == 0
