"""
Courtside Core Security - Roles
=================================
Department roles used by the facility console. Audit events carry
the role as a plain string so roles added upstream still record.
"""

from __future__ import annotations

from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    RECEPTION = "reception"
    FITNESS = "fitness"
    TENNIS = "tennis"
    GOLF = "golf"
