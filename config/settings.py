"""
Courtside – Django Settings
============================
Django serves as the framework container for the Courtside guard:
settings, logging configuration, app lifecycle and the dashboard
JSON endpoints. The guard core does not import Django.

COURTSIDE_MODE selects development or production behavior and
drives DEBUG. COURTSIDE_GUARD tunes retention, capacity and the
suspicious-actor rule; see core.config.guard_settings for keys.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Mode ──────────────────────────────────────────────────────
COURTSIDE_MODE = os.environ.get("COURTSIDE_MODE", "development")

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get(
    "COURTSIDE_SECRET_KEY",
    "courtside-dev-key-replace-before-deployment",
)

DEBUG = COURTSIDE_MODE.strip().lower() in ("development", "dev", "debug")

ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get("COURTSIDE_ALLOWED_HOSTS", "").split(",")
    if host.strip()
]

# ── Installed Apps ────────────────────────────────────────────
# The guard keeps its logs in memory; no Django models.
INSTALLED_APPS = [
    "core.bootstrap",
]

# ── Middleware ────────────────────────────────────────────────
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# ── URL & WSGI ────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"
WSGI_APPLICATION = "config.wsgi.application"

# ── Database ──────────────────────────────────────────────────
DATABASES = {}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

# ── Guard ─────────────────────────────────────────────────────
COURTSIDE_GUARD = {
    "error_retention_hours": 168,
    "error_log_capacity": 10_000,
    "error_cleanup_interval_seconds": 3600,
    "audit_retention_days": 30,
    "audit_log_capacity": 50_000,
    "audit_cleanup_interval_seconds": 86_400,
    "suspicious_window": 10,
    "suspicious_threshold": 5,
    "detector_role": "admin",
    "retry_hint_delay_seconds": 2.0,
}

# ── Logging ───────────────────────────────────────────────────
# Production output is already filtered by the guard itself
# (high/critical only, redacted); handlers here only route it.
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "plain",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "courtside": {
            "level": "INFO" if DEBUG else "WARNING",
        },
    },
}
