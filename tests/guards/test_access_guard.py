"""
Tests for hisaab.guards.access — validate / enforce / guarded action.
"""

import asyncio

import pytest

from hisaab.common import AccessDeniedError, ErrorCode
from hisaab.guards import AccessRequest, enforce_access, guarded_action, validate_access


class TestValidateAccess:
    def test_no_checks_succeeds(self):
        assert validate_access().success is True

    def test_permission_denied(self):
        decision = validate_access(
            role="viewer", plan_tier="enterprise", permission="finance.manage_expenses"
        )
        assert decision.success is False
        assert decision.error_code == ErrorCode.PERMISSION_DENIED
        assert decision.message == (
            'Access denied: your role "viewer" does not have permission '
            '"finance.manage_expenses". Contact your administrator.'
        )

    def test_missing_role_checked_as_viewer(self):
        assert validate_access(role=None, permission="dashboard.view").success is True
        assert validate_access(role=None, permission="pos.access").success is False

    def test_feature_not_on_plan(self):
        decision = validate_access(role="owner", plan_tier="basic", feature="pos")
        assert decision.error_code == ErrorCode.PLAN_UPGRADE_REQUIRED
        assert decision.required_plan == "standard"
        assert decision.message == (
            "This feature requires the Standard plan or higher. "
            "Your current plan: Basic."
        )

    def test_unknown_plan_tier_behaves_as_basic(self):
        decision = validate_access(role="owner", plan_tier="gold", feature="pos")
        assert decision.error_code == ErrorCode.PLAN_UPGRADE_REQUIRED
        assert "Your current plan: Basic." in decision.message

    def test_limit_reached(self):
        decision = validate_access(
            role="owner", plan_tier="basic", limit_key="max_products", current_count=100
        )
        assert decision.error_code == ErrorCode.LIMIT_REACHED
        assert decision.limit == 100
        assert decision.message == (
            "You've reached the limit of 100 products on your current plan. "
            "Please upgrade to add more."
        )

    def test_limit_label_replaces_every_underscore(self):
        decision = validate_access(
            plan_tier="basic", limit_key="max_pos_terminals", current_count=0
        )
        assert "0 pos terminals" in decision.message
        assert decision.to_dict()["limit"] == 0

    def test_limit_skipped_without_numeric_count(self):
        assert validate_access(plan_tier="basic", limit_key="max_products").success
        assert validate_access(
            plan_tier="basic", limit_key="max_pos_terminals", current_count=True
        ).success

    def test_within_limit(self):
        assert validate_access(
            plan_tier="basic", limit_key="max_products", current_count=99
        ).success

    def test_permission_checked_before_feature(self):
        decision = validate_access(
            role="viewer", plan_tier="basic", permission="pos.access", feature="pos"
        )
        assert decision.error_code == ErrorCode.PERMISSION_DENIED

    def test_feature_checked_before_limit(self):
        decision = validate_access(
            role="owner",
            plan_tier="basic",
            feature="pos",
            limit_key="max_pos_terminals",
            current_count=5,
        )
        assert decision.error_code == ErrorCode.PLAN_UPGRADE_REQUIRED

    def test_everything_passes(self):
        decision = validate_access(
            role="cashier",
            plan_tier="standard",
            permission="pos.process_sale",
            feature="pos",
            limit_key="max_pos_terminals",
            current_count=1,
        )
        assert decision.to_dict() == {"success": True}


class TestEnforceAccess:
    def test_raises_with_fields(self):
        with pytest.raises(AccessDeniedError) as exc_info:
            enforce_access(plan_tier="standard", limit_key="max_users", current_count=5)
        assert exc_info.value.code == ErrorCode.LIMIT_REACHED
        assert exc_info.value.limit == 5

    def test_carries_required_plan(self):
        with pytest.raises(AccessDeniedError) as exc_info:
            enforce_access(role="owner", plan_tier="standard", feature="manufacturing")
        assert exc_info.value.required_plan == "premium"

    def test_passes_silently(self):
        assert enforce_access(role="owner", permission="settings.billing") is None


class TestGuardedAction:
    def test_denial_returns_decision_without_running_action(self):
        calls = []

        async def action():
            calls.append(1)
            return {"success": True}

        result = asyncio.run(
            guarded_action(
                {"role": "viewer", "permission": "finance.manage_expenses"}, action
            )
        )
        assert result["success"] is False
        assert result["error_code"] == "PERMISSION_DENIED"
        assert calls == []

    def test_allowed_action_result_is_returned(self):
        async def action():
            return {"success": True, "invoice_id": "INV-1"}

        result = asyncio.run(
            guarded_action(
                AccessRequest(role="cashier", plan_tier="basic", permission="sales.create_invoice"),
                action,
            )
        )
        assert result == {"success": True, "invoice_id": "INV-1"}

    def test_action_exception_is_normalized(self):
        async def action():
            raise RuntimeError("ledger locked")

        result = asyncio.run(guarded_action({}, action))
        assert result == {"success": False, "error": "ledger locked"}

    def test_blank_exception_gets_generic_message(self):
        async def action():
            raise RuntimeError()

        result = asyncio.run(guarded_action(AccessRequest(), action))
        assert result == {"success": False, "error": "An unexpected error occurred."}
