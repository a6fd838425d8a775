"""
Courtside Core Config - Public API
====================================
Guard settings and runtime mode.
"""

from core.config.guard_settings import (
    GuardConfigurationError,
    GuardSettings,
    RuntimeMode,
    load_guard_settings,
)

__all__ = [
    "GuardConfigurationError",
    "GuardSettings",
    "RuntimeMode",
    "load_guard_settings",
]
