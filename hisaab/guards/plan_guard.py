"""
Hisaab Guards — Business Plan Guard
===================================
Plan checks keyed by business id rather than by tier string. The
business's effective plan comes from a BusinessPlanProvider, so an
expired subscription is already downgraded to basic here.
"""

from __future__ import annotations

import functools
import inspect
import logging
import uuid
from typing import Any, Awaitable, Callable, Optional

from asgiref.sync import sync_to_async

from hisaab.common.errors import AccessDeniedError
from hisaab.common.rejection import ErrorCode
from hisaab.guards.access import limit_label
from hisaab.saas.plans import (
    FEATURE_MIN_PLAN,
    PlanTier,
    get_plan_limit,
    plan_display_name,
    plan_has_feature,
    plan_within_limit,
)
from hisaab.saas.subscriptions import BusinessPlan, BusinessPlanProvider

logger = logging.getLogger("hisaab.guards")

BUSINESS_ID_FIRST = "first"
BUSINESS_ID_FROM_OBJECT = "fromObject"
VALID_BUSINESS_ID_ARGS = frozenset({BUSINESS_ID_FIRST, BUSINESS_ID_FROM_OBJECT})


def check_plan_feature(
    business_id: uuid.UUID,
    feature_key: str,
    provider: BusinessPlanProvider,
) -> None:
    _require_feature(provider.get_business_plan(business_id), feature_key)


def _require_feature(plan: BusinessPlan, feature_key: str) -> None:
    if plan_has_feature(plan.plan_tier, feature_key):
        return

    required_plan = FEATURE_MIN_PLAN.get(feature_key, PlanTier.ENTERPRISE.value)
    raise AccessDeniedError(
        ErrorCode.PLAN_UPGRADE_REQUIRED,
        f'Feature "{feature_key}" requires {required_plan} plan or above. '
        f"Current plan: {plan_display_name(plan.plan_tier)}. "
        f"Please upgrade to unlock this feature.",
        required_plan=required_plan,
    )


def check_plan_limit(
    business_id: uuid.UUID,
    limit_key: str,
    current_count: int,
    provider: BusinessPlanProvider,
) -> None:
    plan = provider.get_business_plan(business_id)
    if plan_within_limit(plan.plan_tier, limit_key, current_count):
        return

    limit = get_plan_limit(plan.plan_tier, limit_key)
    raise AccessDeniedError(
        ErrorCode.LIMIT_REACHED,
        f"{limit_label(limit_key)} limit reached ({limit}). "
        f"Current plan: {plan_display_name(plan.plan_tier)}. "
        f"Please upgrade to add more.",
        limit=limit,
    )


def _extract_business_id(
    args: tuple,
    business_id_arg: str,
    business_id_key: str,
) -> Optional[Any]:
    if not args:
        return None
    first = args[0]
    if business_id_arg == BUSINESS_ID_FIRST:
        return first
    if isinstance(first, dict):
        return first.get(business_id_key) or first.get("businessId")
    return getattr(first, business_id_key, None)


async def _load_plan(provider: BusinessPlanProvider, business_id: Any) -> BusinessPlan:
    # Async providers are awaited directly; sync ones run off the event loop.
    if inspect.iscoroutinefunction(provider.get_business_plan):
        return await provider.get_business_plan(business_id)
    return await sync_to_async(provider.get_business_plan)(business_id)


def with_plan(
    feature_key: str,
    provider: BusinessPlanProvider,
    business_id_arg: str = BUSINESS_ID_FIRST,
    business_id_key: str = "business_id",
) -> Callable[[Callable[..., Awaitable[Any]]], Callable[..., Awaitable[Any]]]:
    """
    Decorate an async action so it only runs when the business's plan
    includes `feature_key`.

    business_id_arg:
        "first"      → the first positional argument is the business id
        "fromObject" → read business_id_key from the first argument
    """
    if business_id_arg not in VALID_BUSINESS_ID_ARGS:
        raise ValueError(
            f"business_id_arg '{business_id_arg}' not valid. "
            f"Must be one of: {sorted(VALID_BUSINESS_ID_ARGS)}"
        )

    def decorator(action: Callable[..., Awaitable[Any]]):
        @functools.wraps(action)
        async def wrapper(*args, **kwargs):
            business_id = _extract_business_id(args, business_id_arg, business_id_key)
            if not business_id:
                return {"success": False, "error": "Business ID required"}

            try:
                plan = await _load_plan(provider, business_id)
                _require_feature(plan, feature_key)
                return await action(*args, **kwargs)
            except Exception as exc:
                logger.warning(f"Plan-guarded action '{action.__name__}' failed: {exc}")
                return {"success": False, "error": str(exc)}

        return wrapper

    return decorator
