"""
Hisaab Bootstrap — App Configuration
====================================
Triggers the catalog self-check when Django finishes loading.
Skipped during migrations, setup commands and pytest runs.
"""

import logging
import os
import sys

from django.apps import AppConfig

logger = logging.getLogger("hisaab.bootstrap")

SKIP_COMMANDS = {
    "migrate",
    "makemigrations",
    "showmigrations",
    "sqlmigrate",
    "flush",
    "shell",
    "dbshell",
    "test",
    "check",
}


def _is_management_command_skip():
    if len(sys.argv) >= 2:
        return sys.argv[1] in SKIP_COMMANDS
    return False


def _is_pytest_context() -> bool:
    return (
        "PYTEST_CURRENT_TEST" in os.environ
        or "pytest" in sys.modules
    )


class HisaabBootstrapConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "hisaab.bootstrap"
    label = "hisaab_bootstrap"
    verbose_name = "Hisaab Bootstrap"

    def ready(self):
        if _is_management_command_skip() or _is_pytest_context():
            logger.info("Bootstrap self-check skipped for management/test context.")
            return

        from hisaab.bootstrap.self_check import run_bootstrap_checks
        run_bootstrap_checks()
