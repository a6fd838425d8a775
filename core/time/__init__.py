"""
Courtside Core Time - Public API
==================================
Injectable clock protocol for the error and audit logs.
"""

from core.time.clock import Clock, FixedClock, SystemClock

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
]
