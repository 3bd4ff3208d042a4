"""
Tests for hisaab.common — AccessDecision and error types.
"""

import pytest

from hisaab.common import (
    AccessDecision,
    AccessDeniedError,
    BusinessAccessError,
    ErrorCode,
)


class TestAccessDecision:
    def test_allow_serializes_to_success_only(self):
        assert AccessDecision.allow().to_dict() == {"success": True}

    def test_deny_carries_code_and_message(self):
        decision = AccessDecision.deny(ErrorCode.PERMISSION_DENIED, "nope")
        assert decision.to_dict() == {
            "success": False,
            "error": "nope",
            "error_code": "PERMISSION_DENIED",
        }

    def test_deny_includes_optional_fields(self):
        decision = AccessDecision.deny(
            ErrorCode.LIMIT_REACHED, "full", limit=0
        )
        assert decision.to_dict()["limit"] == 0
        assert "required_plan" not in decision.to_dict()

    def test_rejects_unknown_code(self):
        with pytest.raises(ValueError, match="error_code"):
            AccessDecision.deny("TEAPOT", "short and stout")

    def test_rejects_empty_message_on_denial(self):
        with pytest.raises(ValueError, match="message"):
            AccessDecision.deny(ErrorCode.PERMISSION_DENIED, "")

    def test_success_cannot_carry_error_code(self):
        with pytest.raises(ValueError):
            AccessDecision(success=True, error_code=ErrorCode.PERMISSION_DENIED)

    def test_frozen(self):
        decision = AccessDecision.allow()
        with pytest.raises(Exception):
            decision.success = False


class TestErrors:
    def test_access_denied_error_fields(self):
        exc = AccessDeniedError(
            ErrorCode.PLAN_UPGRADE_REQUIRED, "upgrade", required_plan="standard"
        )
        assert exc.code == exc.error_code == "PLAN_UPGRADE_REQUIRED"
        assert str(exc) == "upgrade"
        assert exc.to_dict()["required_plan"] == "standard"

    def test_business_access_error_message(self):
        assert str(BusinessAccessError("Missing credentials")) == (
            "Unauthorized: Missing credentials"
        )
