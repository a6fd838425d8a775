"""
Courtside Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("errors/stats", views.error_stats_view),
    path("errors/badge", views.error_badge_view),
    path("security/stats", views.security_stats_view),
    path("security/actors/<str:actor_id>/events", views.actor_events_view),
    path("security/actors/<str:actor_id>/detect", views.actor_detect_view),
    path("notifications/drain", views.notifications_drain_view),
]
