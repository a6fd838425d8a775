"""
Courtside Core Config - Guard Settings
========================================
Runtime configuration for the error classifier, the security
audit log and their maintenance timers.

Source order:
1. Django settings (COURTSIDE_MODE, COURTSIDE_GUARD) when a
   settings module is configured.
2. Environment (COURTSIDE_MODE) otherwise.
3. Explicit overrides passed by the caller (tests, scripts).

The runtime mode is the only input that changes observable
behavior: it selects full or redacted internal logging.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Mapping, Optional


class GuardConfigurationError(Exception):
    """Raised at startup when guard settings are invalid."""

    def __init__(self, setting: str, detail: str):
        self.setting = setting
        self.detail = detail
        super().__init__(f"Invalid guard setting '{setting}': {detail}")


# ══════════════════════════════════════════════════════════════
# RUNTIME MODE
# ══════════════════════════════════════════════════════════════

class RuntimeMode(Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"

    @property
    def verbose(self) -> bool:
        return self is RuntimeMode.DEVELOPMENT

    @classmethod
    def parse(cls, raw: Any) -> "RuntimeMode":
        if isinstance(raw, RuntimeMode):
            return raw
        value = str(raw or "").strip().lower()
        if value in ("development", "dev", "debug"):
            return cls.DEVELOPMENT
        if value in ("production", "prod"):
            return cls.PRODUCTION
        raise GuardConfigurationError(
            "COURTSIDE_MODE",
            f"expected 'development' or 'production', got {raw!r}",
        )


# ══════════════════════════════════════════════════════════════
# SETTINGS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class GuardSettings:
    mode: RuntimeMode = RuntimeMode.DEVELOPMENT

    # error log
    error_retention_hours: float = 168.0
    error_log_capacity: int = 10_000
    error_cleanup_interval_seconds: float = 3600.0

    # security audit log
    audit_retention_days: float = 30.0
    audit_log_capacity: int = 50_000
    audit_cleanup_interval_seconds: float = 86_400.0

    # suspicious-actor heuristic
    suspicious_window: int = 10
    suspicious_threshold: int = 5
    detector_role: str = "admin"

    # one-shot "you may retry" hint
    retry_hint_delay_seconds: float = 2.0

    def __post_init__(self) -> None:
        positive = (
            "error_retention_hours",
            "error_log_capacity",
            "error_cleanup_interval_seconds",
            "audit_retention_days",
            "audit_log_capacity",
            "audit_cleanup_interval_seconds",
            "suspicious_window",
            "suspicious_threshold",
            "retry_hint_delay_seconds",
        )
        for name in positive:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise GuardConfigurationError(name, f"must be a positive number, got {value!r}")
        if self.suspicious_threshold > self.suspicious_window:
            raise GuardConfigurationError(
                "suspicious_threshold",
                "cannot exceed suspicious_window",
            )
        if not self.detector_role or not isinstance(self.detector_role, str):
            raise GuardConfigurationError("detector_role", "must be a non-empty string")

    def with_overrides(self, overrides: Mapping[str, Any]) -> "GuardSettings":
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise GuardConfigurationError(
                ", ".join(sorted(unknown)), "unknown setting"
            )
        values = dict(overrides)
        if "mode" in values:
            values["mode"] = RuntimeMode.parse(values["mode"])
        return replace(self, **values)


def _django_source() -> Optional[Mapping[str, Any]]:
    from django.conf import settings

    if not (settings.configured or os.environ.get("DJANGO_SETTINGS_MODULE")):
        return None
    values = dict(getattr(settings, "COURTSIDE_GUARD", {}) or {})
    mode = getattr(settings, "COURTSIDE_MODE", None)
    if mode is not None:
        values.setdefault("mode", mode)
    return values


def load_guard_settings(overrides: Optional[Mapping[str, Any]] = None) -> GuardSettings:
    """Build GuardSettings from Django settings or the environment."""
    source = _django_source()
    if source is None:
        source = {"mode": os.environ.get("COURTSIDE_MODE", "development")}
    result = GuardSettings().with_overrides(source)
    if overrides:
        result = result.with_overrides(overrides)
    return result
