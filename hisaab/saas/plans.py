"""
Hisaab SaaS — Subscription Plan Catalog
=======================================
Static plan tiers with feature flags and numeric usage limits.

Tiers are totally ordered: basic < standard < premium < enterprise.
An unrecognized tier string always resolves to basic, the most
restrictive real tier, never to "no restrictions".
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Optional, Union


# ══════════════════════════════════════════════════════════════
# PLAN TIER ENUM
# ══════════════════════════════════════════════════════════════

class PlanTier(Enum):
    BASIC = "basic"
    STANDARD = "standard"
    PREMIUM = "premium"
    ENTERPRISE = "enterprise"


TIER_SEQUENCE = (
    PlanTier.BASIC,
    PlanTier.STANDARD,
    PlanTier.PREMIUM,
    PlanTier.ENTERPRISE,
)

PLAN_ORDER: Mapping[str, int] = MappingProxyType(
    {tier.value: index for index, tier in enumerate(TIER_SEQUENCE)}
)

# Sentinel for "no cap" in a plan's limits.
UNLIMITED = -1


# ══════════════════════════════════════════════════════════════
# FEATURE & LIMIT KEYS
# ══════════════════════════════════════════════════════════════

ALL_FEATURES = (
    "invoicing",
    "purchases",
    "customers",
    "vendors",
    "basic_accounting",
    "basic_reports",
    "expense_tracking",
    "pos",
    "credit_notes",
    "batch_tracking",
    "serial_tracking",
    "fiscal_periods",
    "multi_currency",
    "manufacturing",
    "ai_analytics",
    "promotions_crm",
    "custom_workflows",
    "api_access",
    "priority_support",
    "white_label",
    "delivery_challans",
    "quotations",
    "multi_warehouse",
    "advanced_reports",
)

ALL_LIMITS = (
    "max_users",
    "max_products",
    "max_warehouses",
    "max_invoices_per_month",
    "max_pos_terminals",
    "max_storage_mb",
)


# ══════════════════════════════════════════════════════════════
# PLAN DATA MODEL (frozen)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PlanDefinition:
    """Immutable subscription plan definition."""

    key: str
    name: str
    price_pkr: Decimal
    price_usd: Decimal
    billing: str               # free | monthly
    features: FrozenSet[str]
    limits: Mapping[str, int]

    def __post_init__(self):
        unknown = self.features - frozenset(ALL_FEATURES)
        if unknown:
            raise ValueError(f"Plan '{self.key}' has unknown features: {sorted(unknown)}")

        missing = [k for k in ALL_LIMITS if k not in self.limits]
        if missing:
            raise ValueError(f"Plan '{self.key}' is missing limits: {missing}")

        for limit_key, value in self.limits.items():
            if not isinstance(value, int) or (value < 0 and value != UNLIMITED):
                raise ValueError(
                    f"Plan '{self.key}' limit '{limit_key}' must be a "
                    f"non-negative int or {UNLIMITED} (unlimited)."
                )

        object.__setattr__(self, "limits", MappingProxyType(dict(self.limits)))

    def has_feature(self, feature: str) -> bool:
        return feature in self.features

    def limit_for(self, limit_key: str) -> Optional[int]:
        return self.limits.get(limit_key)


_CORE_FEATURES = frozenset({
    "invoicing",
    "purchases",
    "customers",
    "vendors",
    "basic_accounting",
    "basic_reports",
    "quotations",
})

_STANDARD_FEATURES = _CORE_FEATURES | {
    "expense_tracking",
    "pos",
    "credit_notes",
    "batch_tracking",
    "serial_tracking",
    "delivery_challans",
    "multi_warehouse",
}

_PREMIUM_FEATURES = _STANDARD_FEATURES | {
    "fiscal_periods",
    "multi_currency",
    "manufacturing",
    "ai_analytics",
    "promotions_crm",
    "api_access",
    "priority_support",
    "advanced_reports",
}

_ENTERPRISE_FEATURES = frozenset(ALL_FEATURES)


# ══════════════════════════════════════════════════════════════
# PLAN CATALOG
# ══════════════════════════════════════════════════════════════

PLAN_TIERS: Mapping[str, PlanDefinition] = MappingProxyType({
    PlanTier.BASIC.value: PlanDefinition(
        key=PlanTier.BASIC.value,
        name="Basic",
        price_pkr=Decimal("0"),
        price_usd=Decimal("0"),
        billing="free",
        features=_CORE_FEATURES,
        limits={
            "max_users": 2,
            "max_products": 100,
            "max_warehouses": 1,
            "max_invoices_per_month": 50,
            "max_pos_terminals": 0,
            "max_storage_mb": 100,
        },
    ),
    PlanTier.STANDARD.value: PlanDefinition(
        key=PlanTier.STANDARD.value,
        name="Standard",
        price_pkr=Decimal("2999"),
        price_usd=Decimal("10"),
        billing="monthly",
        features=frozenset(_STANDARD_FEATURES),
        limits={
            "max_users": 5,
            "max_products": 500,
            "max_warehouses": 3,
            "max_invoices_per_month": 500,
            "max_pos_terminals": 2,
            "max_storage_mb": 500,
        },
    ),
    PlanTier.PREMIUM.value: PlanDefinition(
        key=PlanTier.PREMIUM.value,
        name="Premium",
        price_pkr=Decimal("7999"),
        price_usd=Decimal("28"),
        billing="monthly",
        features=frozenset(_PREMIUM_FEATURES),
        limits={
            "max_users": 15,
            "max_products": 5000,
            "max_warehouses": 10,
            "max_invoices_per_month": 5000,
            "max_pos_terminals": 10,
            "max_storage_mb": 2000,
        },
    ),
    PlanTier.ENTERPRISE.value: PlanDefinition(
        key=PlanTier.ENTERPRISE.value,
        name="Enterprise",
        price_pkr=Decimal("24999"),
        price_usd=Decimal("85"),
        billing="monthly",
        features=_ENTERPRISE_FEATURES,
        limits={
            "max_users": UNLIMITED,
            "max_products": UNLIMITED,
            "max_warehouses": UNLIMITED,
            "max_invoices_per_month": UNLIMITED,
            "max_pos_terminals": UNLIMITED,
            "max_storage_mb": 10000,
        },
    ),
})


def _build_feature_min_plan() -> Dict[str, str]:
    mapping: Dict[str, str] = {}
    for feature in ALL_FEATURES:
        for tier in TIER_SEQUENCE:
            if feature in PLAN_TIERS[tier.value].features:
                mapping[feature] = tier.value
                break
    return mapping


# Lowest tier that unlocks each feature; drives upgrade messaging.
FEATURE_MIN_PLAN: Mapping[str, str] = MappingProxyType(_build_feature_min_plan())


# ══════════════════════════════════════════════════════════════
# LOOKUPS
# ══════════════════════════════════════════════════════════════

def resolve_plan_tier(plan_tier: Union[str, PlanTier, None]) -> str:
    """Canonical tier key; anything unrecognized resolves to basic."""
    if isinstance(plan_tier, PlanTier):
        return plan_tier.value
    if isinstance(plan_tier, str) and plan_tier in PLAN_TIERS:
        return plan_tier
    return PlanTier.BASIC.value


def get_plan(plan_tier: Union[str, PlanTier, None]) -> PlanDefinition:
    return PLAN_TIERS[resolve_plan_tier(plan_tier)]


def plan_display_name(plan_tier: Union[str, PlanTier, None]) -> str:
    return get_plan(plan_tier).name


def plan_has_feature(plan_tier: Union[str, PlanTier, None], feature: str) -> bool:
    """Check if a plan tier includes a feature."""
    return get_plan(plan_tier).has_feature(feature)


def get_plan_limit(
    plan_tier: Union[str, PlanTier, None], limit_key: str
) -> Optional[int]:
    """Numeric cap for limit_key on the plan; None if the key is unknown."""
    return get_plan(plan_tier).limit_for(limit_key)


def plan_within_limit(
    plan_tier: Union[str, PlanTier, None],
    limit_key: str,
    current_count: int,
) -> bool:
    """
    True if the plan allows one more of the resource.

    current_count < limit, or the limit is UNLIMITED.
    An unknown limit_key grants no allowance.
    """
    limit = get_plan_limit(plan_tier, limit_key)
    if limit is None:
        return False
    if limit == UNLIMITED:
        return True
    return current_count < limit


def plan_at_least(
    plan_tier: Union[str, PlanTier, None],
    required_tier: Union[str, PlanTier, None],
) -> bool:
    """Check if plan_tier >= required_tier in the fixed tier order."""
    return (
        PLAN_ORDER[resolve_plan_tier(plan_tier)]
        >= PLAN_ORDER[resolve_plan_tier(required_tier)]
    )
