"""
Hisaab SaaS — Public API
========================
Plan catalog and business plan resolution.
"""

from hisaab.saas.plans import (
    ALL_FEATURES,
    ALL_LIMITS,
    FEATURE_MIN_PLAN,
    PLAN_ORDER,
    PLAN_TIERS,
    UNLIMITED,
    PlanDefinition,
    PlanTier,
    get_plan,
    get_plan_limit,
    plan_at_least,
    plan_display_name,
    plan_has_feature,
    plan_within_limit,
    resolve_plan_tier,
)
from hisaab.saas.subscriptions import (
    BusinessPlan,
    BusinessPlanProvider,
    DbBusinessPlanProvider,
    InMemoryBusinessPlanProvider,
    resolve_effective_plan,
)

__all__ = [
    "ALL_FEATURES",
    "ALL_LIMITS",
    "FEATURE_MIN_PLAN",
    "PLAN_ORDER",
    "PLAN_TIERS",
    "UNLIMITED",
    "PlanDefinition",
    "PlanTier",
    "get_plan",
    "get_plan_limit",
    "plan_at_least",
    "plan_display_name",
    "plan_has_feature",
    "plan_within_limit",
    "resolve_plan_tier",
    "BusinessPlan",
    "BusinessPlanProvider",
    "InMemoryBusinessPlanProvider",
    "DbBusinessPlanProvider",
    "resolve_effective_plan",
]
