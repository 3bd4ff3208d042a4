"""
Hisaab RBAC — Permission Evaluator
==================================
Pure lookups over the static catalog. No I/O, no side effects.

Resolution rules:
- A missing role (None / "") is treated as the least-privileged role.
- An unrecognized role string holds no permissions at all.
- An unknown permission key denies and logs a warning.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, Optional

from hisaab.common.errors import AccessDeniedError
from hisaab.common.rejection import ErrorCode
from hisaab.rbac.catalog import (
    DEFAULT_DOMAIN,
    DOMAIN_DEFAULT_ROLES,
    LEAST_PRIVILEGED_ROLE,
    NAV_PERMISSION_MAP,
    PERMISSION_DEFINITIONS,
    ROLE_HIERARCHY,
)
from hisaab.rbac.models import NavItemAccess, Role
from hisaab.saas.plans import FEATURE_MIN_PLAN, PlanTier, plan_has_feature

logger = logging.getLogger("hisaab.rbac")


def _build_roles() -> Mapping[str, Role]:
    roles = {}
    for role_id, rank in ROLE_HIERARCHY.items():
        granted = tuple(
            permission
            for permission, allowed in PERMISSION_DEFINITIONS.items()
            if role_id in allowed
        )
        roles[role_id] = Role(role_id=role_id, rank=rank, permissions=granted)
    return MappingProxyType(roles)


ROLES: Mapping[str, Role] = _build_roles()


def _effective_role(role: Optional[str]) -> str:
    return role if role else LEAST_PRIVILEGED_ROLE


# ══════════════════════════════════════════════════════════════
# PERMISSION CHECKS
# ══════════════════════════════════════════════════════════════

def has_permission(role: Optional[str], permission: str) -> bool:
    allowed = PERMISSION_DEFINITIONS.get(permission)
    if allowed is None:
        logger.warning(f"Unknown permission: '{permission}'")
        return False
    return _effective_role(role) in allowed


def is_role_at_least(role: Optional[str], min_role: str) -> bool:
    min_rank = ROLE_HIERARCHY.get(min_role)
    if min_rank is None:
        return False
    rank = ROLE_HIERARCHY.get(
        _effective_role(role), ROLE_HIERARCHY[LEAST_PRIVILEGED_ROLE]
    )
    return rank >= min_rank


def get_permissions_for_role(role: Optional[str]) -> frozenset[str]:
    resolved = ROLES.get(_effective_role(role))
    if resolved is None:
        return frozenset()
    return frozenset(resolved.permissions)


def get_permissions_by_module(role: Optional[str]) -> dict[str, tuple[str, ...]]:
    """Group a role's permission keys by their leading module segment."""
    grouped: dict[str, list[str]] = {}
    for permission in sorted(get_permissions_for_role(role)):
        module = permission.split(".", 1)[0]
        grouped.setdefault(module, []).append(permission)
    return {module: tuple(keys) for module, keys in grouped.items()}


def require_permission(
    role: Optional[str],
    permission: str,
    plan_tier: Optional[str] = None,
    feature_key: Optional[str] = None,
) -> None:
    """
    Raise AccessDeniedError unless `role` holds `permission` and, when both
    plan_tier and feature_key are given, the plan includes the feature.
    """
    if not has_permission(role, permission):
        raise AccessDeniedError(
            ErrorCode.PERMISSION_DENIED,
            f'Access denied: role "{role}" lacks permission "{permission}". '
            f"Contact your business administrator to request access.",
        )

    if plan_tier and feature_key and not plan_has_feature(plan_tier, feature_key):
        raise AccessDeniedError(
            ErrorCode.PLAN_UPGRADE_REQUIRED,
            f'Feature "{feature_key}" requires a plan upgrade. '
            f"Current plan: {plan_tier}. Please upgrade to access this feature.",
            required_plan=FEATURE_MIN_PLAN.get(feature_key, PlanTier.STANDARD.value),
        )


# ══════════════════════════════════════════════════════════════
# NAVIGATION GATING
# ══════════════════════════════════════════════════════════════

def get_nav_item_access(
    nav_key: str,
    role: Optional[str],
    plan_tier: Optional[str],
) -> NavItemAccess:
    mapping = NAV_PERMISSION_MAP.get(nav_key)
    if mapping is None:
        return NavItemAccess(visible=True)

    permission, feature = mapping
    if not has_permission(role, permission):
        return NavItemAccess(visible=False)

    if feature and not plan_has_feature(plan_tier, feature):
        return NavItemAccess(
            visible=True,
            locked=True,
            required_plan=FEATURE_MIN_PLAN.get(feature, PlanTier.STANDARD.value),
        )

    return NavItemAccess(visible=True)


def get_suggested_roles(domain: Optional[str]) -> tuple[str, ...]:
    return DOMAIN_DEFAULT_ROLES.get(domain or DEFAULT_DOMAIN, DOMAIN_DEFAULT_ROLES[DEFAULT_DOMAIN])
