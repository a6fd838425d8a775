"""
Courtside Bootstrap - Service Wiring
======================================
Builds the guard services and starts them with the Django app.
"""

from core.bootstrap.container import GuardServices, build_guard_services

__all__ = [
    "GuardServices",
    "build_guard_services",
]
