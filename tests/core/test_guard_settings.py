"""
Tests — Guard Settings
========================
Defaults, validation, overrides and loading from Django settings.
"""

from __future__ import annotations

import pytest

from core.config.guard_settings import (
    GuardConfigurationError,
    GuardSettings,
    RuntimeMode,
    load_guard_settings,
)


# ── Runtime mode ─────────────────────────────────────────────

class TestRuntimeMode:
    @pytest.mark.parametrize("raw", ["development", "DEV", " debug "])
    def test_development_aliases(self, raw):
        assert RuntimeMode.parse(raw) is RuntimeMode.DEVELOPMENT

    @pytest.mark.parametrize("raw", ["production", "Prod"])
    def test_production_aliases(self, raw):
        assert RuntimeMode.parse(raw) is RuntimeMode.PRODUCTION

    def test_unknown_mode(self):
        with pytest.raises(GuardConfigurationError) as exc_info:
            RuntimeMode.parse("staging")
        assert exc_info.value.setting == "COURTSIDE_MODE"

    def test_verbose(self):
        assert RuntimeMode.DEVELOPMENT.verbose is True
        assert RuntimeMode.PRODUCTION.verbose is False


# ── Settings ─────────────────────────────────────────────────

class TestGuardSettings:
    def test_defaults(self):
        s = GuardSettings()
        assert s.mode is RuntimeMode.DEVELOPMENT
        assert s.error_retention_hours == 168
        assert s.audit_retention_days == 30
        assert s.suspicious_window == 10
        assert s.suspicious_threshold == 5
        assert s.detector_role == "admin"
        assert s.retry_hint_delay_seconds == 2.0

    @pytest.mark.parametrize(
        "field,value",
        [
            ("error_log_capacity", 0),
            ("audit_retention_days", -1),
            ("suspicious_window", "ten"),
            ("retry_hint_delay_seconds", True),
        ],
    )
    def test_rejects_non_positive(self, field, value):
        with pytest.raises(GuardConfigurationError) as exc_info:
            GuardSettings(**{field: value})
        assert exc_info.value.setting == field

    def test_threshold_cannot_exceed_window(self):
        with pytest.raises(GuardConfigurationError):
            GuardSettings(suspicious_window=3, suspicious_threshold=4)

    def test_empty_detector_role(self):
        with pytest.raises(GuardConfigurationError):
            GuardSettings(detector_role="")

    def test_with_overrides_parses_mode(self):
        s = GuardSettings().with_overrides({"mode": "prod", "audit_retention_days": 7})
        assert s.mode is RuntimeMode.PRODUCTION
        assert s.audit_retention_days == 7

    def test_with_overrides_rejects_unknown_keys(self):
        with pytest.raises(GuardConfigurationError, match="unknown setting"):
            GuardSettings().with_overrides({"retention": 1})


# ── Loading ──────────────────────────────────────────────────

class TestLoadGuardSettings:
    def test_reads_django_settings(self, settings):
        settings.COURTSIDE_MODE = "production"
        settings.COURTSIDE_GUARD = {"suspicious_threshold": 3, "detector_role": "security"}
        loaded = load_guard_settings()
        assert loaded.mode is RuntimeMode.PRODUCTION
        assert loaded.suspicious_threshold == 3
        assert loaded.detector_role == "security"

    def test_explicit_overrides_win(self, settings):
        settings.COURTSIDE_MODE = "production"
        loaded = load_guard_settings({"mode": "development"})
        assert loaded.mode is RuntimeMode.DEVELOPMENT

    def test_bad_django_value_fails_fast(self, settings):
        settings.COURTSIDE_GUARD = {"error_log_capacity": -5}
        with pytest.raises(GuardConfigurationError):
            load_guard_settings()

    def test_mode_inside_guard_dict_is_respected(self, settings):
        settings.COURTSIDE_MODE = "development"
        settings.COURTSIDE_GUARD = {"mode": "production"}
        assert load_guard_settings().mode is RuntimeMode.PRODUCTION
