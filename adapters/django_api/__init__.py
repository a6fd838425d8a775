"""
Courtside Django HTTP adapter.
Thin framework glue over core/http_api handlers.
"""

from adapters.django_api.wiring import build_services, install_services, reset_services

__all__ = [
    "build_services",
    "install_services",
    "reset_services",
]
