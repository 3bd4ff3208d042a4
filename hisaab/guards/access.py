"""
Hisaab Guards — Access Validation
=================================
Single entry point every server-side action runs before doing work.

Checks run in order and short-circuit on the first failure:
  1. Role permission        → PERMISSION_DENIED
  2. Plan feature           → PLAN_UPGRADE_REQUIRED
  3. Plan usage limit       → LIMIT_REACHED

The guard is stateless and does no date arithmetic. Callers pass an
already-normalized plan tier (see hisaab.saas.subscriptions).
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from hisaab.common.errors import AccessDeniedError
from hisaab.common.rejection import AccessDecision, ErrorCode
from hisaab.rbac.catalog import LEAST_PRIVILEGED_ROLE
from hisaab.rbac.evaluator import has_permission
from hisaab.saas.plans import (
    FEATURE_MIN_PLAN,
    PlanTier,
    get_plan_limit,
    plan_display_name,
    plan_has_feature,
    plan_within_limit,
    resolve_plan_tier,
)

logger = logging.getLogger("hisaab.guards")

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."


def limit_label(limit_key: str) -> str:
    """'max_pos_terminals' → 'pos terminals'."""
    return limit_key.replace("max_", "", 1).replace("_", " ")


# ══════════════════════════════════════════════════════════════
# ACCESS REQUEST
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class AccessRequest:
    """Inputs for one guard evaluation. Every check is optional."""

    role: Optional[str] = None
    plan_tier: Optional[str] = None
    permission: Optional[str] = None
    feature: Optional[str] = None
    limit_key: Optional[str] = None
    current_count: Optional[int] = None


def _has_count(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


# ══════════════════════════════════════════════════════════════
# VALIDATE / ENFORCE
# ══════════════════════════════════════════════════════════════

def validate_access(
    role: Optional[str] = None,
    plan_tier: Optional[str] = None,
    permission: Optional[str] = None,
    feature: Optional[str] = None,
    limit_key: Optional[str] = None,
    current_count: Optional[int] = None,
) -> AccessDecision:
    if permission:
        if not has_permission(role or LEAST_PRIVILEGED_ROLE, permission):
            return AccessDecision.deny(
                ErrorCode.PERMISSION_DENIED,
                f'Access denied: your role "{role}" does not have permission '
                f'"{permission}". Contact your administrator.',
            )

    tier = resolve_plan_tier(plan_tier)

    if feature:
        if not plan_has_feature(tier, feature):
            required_plan = FEATURE_MIN_PLAN.get(feature, PlanTier.STANDARD.value)
            return AccessDecision.deny(
                ErrorCode.PLAN_UPGRADE_REQUIRED,
                f"This feature requires the {plan_display_name(required_plan)} "
                f"plan or higher. Your current plan: {plan_display_name(tier)}.",
                required_plan=required_plan,
            )

    if limit_key and _has_count(current_count):
        if not plan_within_limit(tier, limit_key, current_count):
            limit = get_plan_limit(tier, limit_key)
            return AccessDecision.deny(
                ErrorCode.LIMIT_REACHED,
                f"You've reached the limit of {limit} {limit_label(limit_key)} "
                f"on your current plan. Please upgrade to add more.",
                limit=limit,
            )

    return AccessDecision.allow()


def enforce_access(
    role: Optional[str] = None,
    plan_tier: Optional[str] = None,
    permission: Optional[str] = None,
    feature: Optional[str] = None,
    limit_key: Optional[str] = None,
    current_count: Optional[int] = None,
) -> None:
    """Raise AccessDeniedError when validate_access() denies."""
    decision = validate_access(
        role=role,
        plan_tier=plan_tier,
        permission=permission,
        feature=feature,
        limit_key=limit_key,
        current_count=current_count,
    )
    if not decision.success:
        raise AccessDeniedError(
            decision.error_code,
            decision.message,
            required_plan=decision.required_plan,
            limit=decision.limit,
        )


# ══════════════════════════════════════════════════════════════
# GUARDED ACTION
# ══════════════════════════════════════════════════════════════

async def guarded_action(
    access_options: Union[AccessRequest, Mapping[str, Any]],
    action: Callable[[], Awaitable[Any]],
) -> Any:
    """
    Validate, then run `action`.

    Denials come back as the decision's dict. Any exception raised by the
    action is logged and returned as {"success": False, "error": ...}.
    """
    if isinstance(access_options, AccessRequest):
        options = asdict(access_options)
    else:
        options = dict(access_options)

    decision = validate_access(**options)
    if not decision.success:
        return decision.to_dict()

    try:
        return await action()
    except Exception as exc:
        logger.exception(f"Guarded action failed: {exc}")
        return {
            "success": False,
            "error": str(exc) or UNEXPECTED_ERROR_MESSAGE,
        }
