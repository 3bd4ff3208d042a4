"""
Tests for hisaab.saas.subscriptions — effective plan with expiry downgrade.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from hisaab.common import BusinessNotFoundError
from hisaab.saas import InMemoryBusinessPlanProvider, resolve_effective_plan
from hisaab.time import FixedClock

NOW = datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)
BIZ = uuid.uuid5(uuid.NAMESPACE_URL, "hisaab-subscription-biz")
EXPIRED_BIZ = uuid.uuid5(uuid.NAMESPACE_URL, "hisaab-subscription-expired")


class TestResolveEffectivePlan:
    def test_future_expiry_keeps_tier(self):
        expires = NOW + timedelta(days=10)
        plan = resolve_effective_plan("premium", expires, NOW)
        assert plan.plan_tier == "premium"
        assert plan.plan_expires_at == expires
        assert plan.expired is False

    def test_past_expiry_downgrades_to_basic(self):
        plan = resolve_effective_plan("premium", NOW - timedelta(seconds=1), NOW)
        assert plan.plan_tier == "basic"
        assert plan.plan_expires_at is None
        assert plan.expired is True

    def test_no_expiry_never_expires(self):
        assert resolve_effective_plan("enterprise", None, NOW).plan_tier == "enterprise"

    def test_missing_tier_is_basic(self):
        assert resolve_effective_plan(None, None, NOW).plan_tier == "basic"


class TestInMemoryProvider:
    @pytest.fixture
    def clock(self):
        return FixedClock(NOW)

    @pytest.fixture
    def provider(self, clock):
        return InMemoryBusinessPlanProvider(
            records=(
                (BIZ, "standard", NOW + timedelta(days=1)),
                (EXPIRED_BIZ, "enterprise", NOW - timedelta(days=1)),
            ),
            clock=clock,
        )

    def test_active_plan(self, provider):
        assert provider.get_business_plan(BIZ).plan_tier == "standard"

    def test_expired_plan(self, provider):
        plan = provider.get_business_plan(EXPIRED_BIZ)
        assert plan.plan_tier == "basic"
        assert plan.expired is True

    def test_plan_expires_as_clock_advances(self, provider, clock):
        clock.advance(2 * 24 * 3600)
        assert provider.get_business_plan(BIZ).expired is True

    def test_unknown_business(self, provider):
        with pytest.raises(BusinessNotFoundError):
            provider.get_business_plan(uuid.uuid4())

    def test_duplicate_business_rejected(self):
        with pytest.raises(ValueError, match="Duplicate"):
            InMemoryBusinessPlanProvider(records=((BIZ, "basic", None), (BIZ, "premium", None)))
