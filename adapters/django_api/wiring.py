"""
Courtside Django Adapter Wiring
===============================
Holds the process-wide GuardServices for the Django runtime.

This module is adapter-only glue:
- no core contract changes
- services are built lazily from Django settings
- tests may install their own services and reset afterwards
"""

from __future__ import annotations

import threading

from core.bootstrap.container import GuardServices, build_guard_services

_SERVICES_LOCK = threading.Lock()
_SERVICES: GuardServices | None = None


def build_services() -> GuardServices:
    """
    Lazy singleton wiring for adapter runtime.
    """
    global _SERVICES
    with _SERVICES_LOCK:
        if _SERVICES is None:
            _SERVICES = build_guard_services()
        return _SERVICES


def install_services(services: GuardServices) -> None:
    global _SERVICES
    with _SERVICES_LOCK:
        _SERVICES = services


def reset_services() -> None:
    """Drop the current services, stopping their maintenance timers."""
    global _SERVICES
    with _SERVICES_LOCK:
        if _SERVICES is not None:
            _SERVICES.stop_maintenance()
        _SERVICES = None
