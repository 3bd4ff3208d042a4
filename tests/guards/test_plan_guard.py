"""
Tests for hisaab.guards.plan_guard — business-keyed plan checks.
"""

import asyncio
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from hisaab.common import AccessDeniedError, ErrorCode
from hisaab.guards import check_plan_feature, check_plan_limit, with_plan
from hisaab.saas import InMemoryBusinessPlanProvider
from hisaab.time import FixedClock

NOW = datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)
BASIC_BIZ = uuid.uuid5(uuid.NAMESPACE_URL, "hisaab-guard-basic")
PREMIUM_BIZ = uuid.uuid5(uuid.NAMESPACE_URL, "hisaab-guard-premium")
LAPSED_BIZ = uuid.uuid5(uuid.NAMESPACE_URL, "hisaab-guard-lapsed")


@pytest.fixture
def provider():
    return InMemoryBusinessPlanProvider(
        records=(
            (BASIC_BIZ, "basic", None),
            (PREMIUM_BIZ, "premium", NOW + timedelta(days=30)),
            (LAPSED_BIZ, "premium", NOW - timedelta(days=1)),
        ),
        clock=FixedClock(NOW),
    )


class TestCheckPlanFeature:
    def test_feature_on_plan(self, provider):
        check_plan_feature(PREMIUM_BIZ, "manufacturing", provider)

    def test_feature_missing(self, provider):
        with pytest.raises(AccessDeniedError) as exc_info:
            check_plan_feature(BASIC_BIZ, "pos", provider)
        assert exc_info.value.code == ErrorCode.PLAN_UPGRADE_REQUIRED
        assert exc_info.value.required_plan == "standard"
        assert str(exc_info.value) == (
            'Feature "pos" requires standard plan or above. '
            "Current plan: Basic. Please upgrade to unlock this feature."
        )

    def test_lapsed_plan_loses_premium_features(self, provider):
        with pytest.raises(AccessDeniedError):
            check_plan_feature(LAPSED_BIZ, "manufacturing", provider)

    def test_unknown_feature_points_at_enterprise(self, provider):
        with pytest.raises(AccessDeniedError) as exc_info:
            check_plan_feature(PREMIUM_BIZ, "hoverboards", provider)
        assert exc_info.value.required_plan == "enterprise"


class TestCheckPlanLimit:
    def test_within_limit(self, provider):
        check_plan_limit(BASIC_BIZ, "max_users", 1, provider)

    def test_limit_reached(self, provider):
        with pytest.raises(AccessDeniedError) as exc_info:
            check_plan_limit(BASIC_BIZ, "max_users", 2, provider)
        assert exc_info.value.code == ErrorCode.LIMIT_REACHED
        assert exc_info.value.limit == 2
        assert str(exc_info.value) == (
            "users limit reached (2). Current plan: Basic. Please upgrade to add more."
        )


class TestWithPlan:
    def test_runs_action_when_feature_available(self, provider):
        @with_plan("manufacturing", provider)
        async def create_bom(business_id, name):
            return {"success": True, "name": name}

        assert asyncio.run(create_bom(PREMIUM_BIZ, "Chair")) == {
            "success": True,
            "name": "Chair",
        }

    def test_blocks_action_without_feature(self, provider):
        calls = []

        @with_plan("manufacturing", provider)
        async def create_bom(business_id):
            calls.append(business_id)
            return {"success": True}

        result = asyncio.run(create_bom(BASIC_BIZ))
        assert result["success"] is False
        assert "manufacturing" in result["error"]
        assert calls == []

    def test_business_id_from_object(self, provider):
        @with_plan("pos", provider, business_id_arg="fromObject")
        async def open_session(payload):
            return {"success": True}

        assert asyncio.run(open_session({"business_id": PREMIUM_BIZ}))["success"] is True
        assert asyncio.run(open_session({"businessId": PREMIUM_BIZ}))["success"] is True

    def test_missing_business_id(self, provider):
        @with_plan("pos", provider, business_id_arg="fromObject")
        async def open_session(payload):
            return {"success": True}

        assert asyncio.run(open_session({})) == {
            "success": False,
            "error": "Business ID required",
        }

    def test_unknown_business(self, provider):
        @with_plan("pos", provider)
        async def action(business_id):
            return {"success": True}

        result = asyncio.run(action(uuid.uuid4()))
        assert result["success"] is False
        assert "Business not found" in result["error"]

    def test_action_errors_are_returned(self, provider):
        @with_plan("pos", provider)
        async def action(business_id):
            raise RuntimeError("printer offline")

        assert asyncio.run(action(PREMIUM_BIZ)) == {
            "success": False,
            "error": "printer offline",
        }

    def test_awaits_async_plan_provider(self, provider):
        class AsyncPlanProvider:
            async def get_business_plan(self, business_id):
                return provider.get_business_plan(business_id)

        @with_plan("manufacturing", AsyncPlanProvider())
        async def create_bom(business_id):
            return {"success": True}

        assert asyncio.run(create_bom(PREMIUM_BIZ)) == {"success": True}
        assert "manufacturing" in asyncio.run(create_bom(BASIC_BIZ))["error"]

    def test_rejects_unknown_extraction_mode(self, provider):
        with pytest.raises(ValueError, match="business_id_arg"):
            with_plan("pos", provider, business_id_arg="last")

    def test_preserves_wrapped_name(self, provider):
        @with_plan("pos", provider)
        async def record_sale(business_id):
            return None

        assert record_sale.__name__ == "record_sale"
