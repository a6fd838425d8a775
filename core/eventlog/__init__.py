"""
Courtside Core Event Log - Public API
=======================================
"""

from core.eventlog.ring import TimeOrderedLog

__all__ = ["TimeOrderedLog"]
