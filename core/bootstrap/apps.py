"""
Courtside Bootstrap - App Configuration
=========================================
Brings the guard online when Django finishes loading.

Rules:
- Runs once via ready()
- Validates guard settings (GuardConfigurationError stops startup)
- Starts the cleanup timers and installs the global error hooks
- Skips timers and hooks under management commands and pytest
"""

import logging
import os
import sys

from django.apps import AppConfig

logger = logging.getLogger("courtside.bootstrap")

# Commands that should not start background timers or replace
# process-wide exception hooks
SKIP_COMMANDS = {
    "migrate",
    "makemigrations",
    "showmigrations",
    "shell",
    "dbshell",
    "test",
    "collectstatic",
    "check",
}


def _is_management_command_skip():
    """Check if current command should skip guard startup."""
    if len(sys.argv) >= 2:
        return sys.argv[1] in SKIP_COMMANDS
    return False


def _is_pytest_context() -> bool:
    return (
        "PYTEST_CURRENT_TEST" in os.environ
        or "pytest" in sys.modules
    )


class BootstrapConfig(AppConfig):
    name = "core.bootstrap"
    label = "bootstrap"
    verbose_name = "Courtside Guard Bootstrap"

    def ready(self):
        from core.config.guard_settings import load_guard_settings

        # Fail fast on bad configuration, even in skipped contexts
        load_guard_settings()

        if _is_management_command_skip() or _is_pytest_context():
            logger.info(
                "Guard startup skipped for management/test context."
            )
            return

        from adapters.django_api.wiring import build_services
        from core.errors.global_hooks import install_global_error_handling

        services = build_services()
        services.start_maintenance()
        install_global_error_handling(services.classifier)
