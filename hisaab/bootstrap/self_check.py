"""
Hisaab Bootstrap — Self-Check Orchestrator
==========================================
Runs all catalog checks at startup. Any CatalogIntegrityError propagates
and stops the process.
"""

import logging

from hisaab.bootstrap.invariants import (
    check_navigation_map,
    check_plan_catalog,
    check_role_references,
    check_tenancy_tables,
)

logger = logging.getLogger("hisaab.bootstrap")


def run_catalog_checks():
    """Static checks only; no database access."""
    check_role_references()
    check_navigation_map()
    check_plan_catalog()


def run_bootstrap_checks():
    logger.info("═══ Hisaab Bootstrap Self-Check Starting ═══")

    run_catalog_checks()
    check_tenancy_tables()

    logger.info("═══ Hisaab Bootstrap Self-Check PASSED ═══")
