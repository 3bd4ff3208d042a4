"""
Hisaab SaaS — Business Plan Resolution
======================================
Loads a business's persisted plan tier and normalizes it before the
guard layer sees it.

An expired plan (plan_expires_at in the past) is an implicit downgrade to
basic. This is derived on every read and never written back. The guard
layer itself is tier-string-only and does no date arithmetic.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Protocol, Tuple

from hisaab.caching import TTLCache, cache_key
from hisaab.common.errors import BusinessNotFoundError
from hisaab.saas.plans import PlanTier, resolve_plan_tier
from hisaab.time import Clock, SystemClock

logger = logging.getLogger("hisaab.saas")


# ══════════════════════════════════════════════════════════════
# EFFECTIVE PLAN
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class BusinessPlan:
    """Plan tier a business is entitled to right now."""

    plan_tier: str
    plan_expires_at: Optional[datetime] = None
    expired: bool = False


def resolve_effective_plan(
    plan_tier: Optional[str],
    plan_expires_at: Optional[datetime],
    now: datetime,
) -> BusinessPlan:
    """
    Normalize a stored (plan_tier, plan_expires_at) pair at time `now`.

    Past expiry → basic with expired=True. A missing or unknown tier → basic.
    """
    if plan_expires_at is not None and plan_expires_at < now:
        return BusinessPlan(
            plan_tier=PlanTier.BASIC.value,
            plan_expires_at=None,
            expired=True,
        )

    return BusinessPlan(
        plan_tier=resolve_plan_tier(plan_tier),
        plan_expires_at=plan_expires_at,
        expired=False,
    )


# ══════════════════════════════════════════════════════════════
# PROVIDER PROTOCOL
# ══════════════════════════════════════════════════════════════

class BusinessPlanProvider(Protocol):
    def get_business_plan(self, business_id: uuid.UUID) -> BusinessPlan:
        ...


# ══════════════════════════════════════════════════════════════
# IN-MEMORY PROVIDER (tests / bootstrap)
# ══════════════════════════════════════════════════════════════

class InMemoryBusinessPlanProvider:
    """
    Deterministic in-memory provider used for bootstrap/tests.

    records: iterable of (business_id, plan_tier, plan_expires_at).
    """

    def __init__(
        self,
        records: Iterable[Tuple[uuid.UUID, Optional[str], Optional[datetime]]] = (),
        clock: Optional[Clock] = None,
    ):
        self._clock = clock or SystemClock()
        self._records: dict[uuid.UUID, Tuple[Optional[str], Optional[datetime]]] = {}
        for business_id, plan_tier, plan_expires_at in records:
            if business_id in self._records:
                raise ValueError(f"Duplicate business_id '{business_id}'.")
            self._records[business_id] = (plan_tier, plan_expires_at)

    def get_business_plan(self, business_id: uuid.UUID) -> BusinessPlan:
        record = self._records.get(business_id)
        if record is None:
            raise BusinessNotFoundError(business_id)
        plan_tier, plan_expires_at = record
        return resolve_effective_plan(plan_tier, plan_expires_at, self._clock.now_utc())


# ══════════════════════════════════════════════════════════════
# DB-BACKED PROVIDER
# ══════════════════════════════════════════════════════════════

class DbBusinessPlanProvider:
    """
    Reads plan_tier / plan_expires_at from the tenancy Business table.

    The raw row is cached (when a cache is injected); expiry is evaluated
    on every call so a cached row never outlives its plan.
    """

    CACHE_MODULE = "plan"

    def __init__(
        self,
        cache: Optional[TTLCache] = None,
        clock: Optional[Clock] = None,
        ttl_seconds: Optional[int] = None,
    ):
        self._cache = cache
        self._clock = clock or SystemClock()
        self._ttl_seconds = ttl_seconds

    def _load_row(self, business_id: uuid.UUID) -> Tuple[Optional[str], Optional[datetime]]:
        from hisaab.tenancy.models import Business

        row = (
            Business.objects.filter(business_id=business_id)
            .values_list("plan_tier", "plan_expires_at")
            .first()
        )
        if row is None:
            raise BusinessNotFoundError(business_id)
        return row[0], row[1]

    def get_business_plan(self, business_id: uuid.UUID) -> BusinessPlan:
        now = self._clock.now_utc()
        if self._cache is None:
            plan_tier, plan_expires_at = self._load_row(business_id)
        else:
            plan_tier, plan_expires_at = self._cache.get_or_load(
                cache_key(business_id, self.CACHE_MODULE),
                lambda: self._load_row(business_id),
                now,
                ttl_seconds=self._ttl_seconds,
            )

        plan = resolve_effective_plan(plan_tier, plan_expires_at, now)
        if plan.expired:
            logger.info(
                f"Plan for business {business_id} expired at "
                f"{plan_expires_at}; treating as basic."
            )
        return plan

    def invalidate(self, business_id: uuid.UUID) -> None:
        """Drop the cached plan row after a plan change."""
        if self._cache is not None:
            self._cache.invalidate(cache_key(business_id, self.CACHE_MODULE))
