"""
Hisaab Bootstrap — Catalog Invariant Checks
===========================================
Each function verifies one catalog law and raises CatalogIntegrityError
when it does not hold. Nothing here repairs a table.
"""

import logging

from django.db import connection

from hisaab.bootstrap.errors import CatalogIntegrityError
from hisaab.rbac.catalog import (
    DOMAIN_DEFAULT_ROLES,
    NAV_PERMISSION_MAP,
    PERMISSION_DEFINITIONS,
    ROLE_HIERARCHY,
)
from hisaab.saas.plans import (
    ALL_FEATURES,
    ALL_LIMITS,
    FEATURE_MIN_PLAN,
    PLAN_ORDER,
    PLAN_TIERS,
    TIER_SEQUENCE,
)

logger = logging.getLogger("hisaab.bootstrap")

TENANCY_TABLES = (
    "hisaab_businesses",
    "hisaab_business_users",
    "hisaab_tax_configurations",
)


# ══════════════════════════════════════════════════════════════
# CHECK 1: Role references resolve
# ══════════════════════════════════════════════════════════════

def check_role_references():
    """Every role named by a permission or a domain default must exist."""
    ranks = sorted(ROLE_HIERARCHY.values())
    if ranks != list(range(len(ranks))):
        raise CatalogIntegrityError(
            invariant="ROLE_HIERARCHY",
            detail=f"Role ranks must be contiguous from 0, got {ranks}.",
        )

    for permission, roles in PERMISSION_DEFINITIONS.items():
        unknown = sorted(roles - set(ROLE_HIERARCHY))
        if unknown:
            raise CatalogIntegrityError(
                invariant="PERMISSION_ROLES",
                detail=f"Permission '{permission}' grants unknown roles {unknown}.",
            )
        if not roles:
            raise CatalogIntegrityError(
                invariant="PERMISSION_ROLES",
                detail=f"Permission '{permission}' grants no role.",
            )

    for domain, roles in DOMAIN_DEFAULT_ROLES.items():
        unknown = sorted(set(roles) - set(ROLE_HIERARCHY))
        if unknown:
            raise CatalogIntegrityError(
                invariant="DOMAIN_ROLES",
                detail=f"Domain '{domain}' suggests unknown roles {unknown}.",
            )

    logger.info("✓ Role references resolve.")


# ══════════════════════════════════════════════════════════════
# CHECK 2: Navigation map has no dangling keys
# ══════════════════════════════════════════════════════════════

def check_navigation_map():
    for nav_key, (permission, feature) in NAV_PERMISSION_MAP.items():
        if permission not in PERMISSION_DEFINITIONS:
            raise CatalogIntegrityError(
                invariant="NAV_PERMISSION",
                detail=f"Nav item '{nav_key}' needs unknown permission '{permission}'.",
            )
        if feature is not None and feature not in ALL_FEATURES:
            raise CatalogIntegrityError(
                invariant="NAV_FEATURE",
                detail=f"Nav item '{nav_key}' needs unknown feature '{feature}'.",
            )

    logger.info("✓ Navigation map references resolve.")


# ══════════════════════════════════════════════════════════════
# CHECK 3: Plan catalog is ordered and monotone
# ══════════════════════════════════════════════════════════════

def check_plan_catalog():
    """
    Tiers form a total order, every feature is reachable on some tier,
    and a higher tier never loses a feature a lower tier has.
    """
    if sorted(PLAN_ORDER.values()) != list(range(len(TIER_SEQUENCE))):
        raise CatalogIntegrityError(
            invariant="PLAN_ORDER",
            detail=f"Plan order is not total: {dict(PLAN_ORDER)}.",
        )

    if set(PLAN_TIERS) != set(PLAN_ORDER):
        raise CatalogIntegrityError(
            invariant="PLAN_ORDER",
            detail="Plan catalog and plan order name different tiers.",
        )

    missing = sorted(set(ALL_FEATURES) - set(FEATURE_MIN_PLAN))
    if missing:
        raise CatalogIntegrityError(
            invariant="FEATURE_MIN_PLAN",
            detail=f"Features on no plan: {missing}.",
        )

    for lower, higher in zip(TIER_SEQUENCE, TIER_SEQUENCE[1:]):
        lost = sorted(
            PLAN_TIERS[lower.value].features - PLAN_TIERS[higher.value].features
        )
        if lost:
            raise CatalogIntegrityError(
                invariant="PLAN_MONOTONE",
                detail=f"'{higher.value}' drops features of '{lower.value}': {lost}.",
            )

    for tier in TIER_SEQUENCE:
        absent = sorted(set(ALL_LIMITS) - set(PLAN_TIERS[tier.value].limits))
        if absent:
            raise CatalogIntegrityError(
                invariant="PLAN_LIMITS",
                detail=f"Plan '{tier.value}' is missing limits {absent}.",
            )

    logger.info("✓ Plan catalog ordered and monotone.")


# ══════════════════════════════════════════════════════════════
# CHECK 4: Tenancy tables exist
# ══════════════════════════════════════════════════════════════

def check_tenancy_tables():
    table_names = set(connection.introspection.table_names())
    missing = [table for table in TENANCY_TABLES if table not in table_names]
    if missing:
        raise CatalogIntegrityError(
            invariant="TENANCY_TABLES",
            detail=(
                f"Tables {missing} do not exist. "
                "Run migrations before starting Hisaab."
            ),
        )

    logger.info("✓ Tenancy tables exist.")
