"""
Hisaab Common — Access Decision Model
=====================================
Structured result of a guard evaluation.

An AccessDecision is never persisted. It is produced fresh per call
and carries no identity. Every denial is:
- Deterministic (same role/plan/inputs → same decision)
- Machine-readable (error_code, required_plan, limit)
- End-user readable (message)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


# ══════════════════════════════════════════════════════════════
# ERROR CODES
# ══════════════════════════════════════════════════════════════

class ErrorCode:
    """
    Denial codes produced by the guard layer.

    All three are recoverable by the user: the message is shown as-is
    and required_plan drives upgrade prompts.
    """

    PERMISSION_DENIED = "PERMISSION_DENIED"
    PLAN_UPGRADE_REQUIRED = "PLAN_UPGRADE_REQUIRED"
    LIMIT_REACHED = "LIMIT_REACHED"

    ALL = frozenset({PERMISSION_DENIED, PLAN_UPGRADE_REQUIRED, LIMIT_REACHED})


# ══════════════════════════════════════════════════════════════
# ACCESS DECISION (frozen)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class AccessDecision:
    """
    Outcome of validate_access().

    Fields:
        success:       True when the operation may proceed.
        error_code:    One of ErrorCode (only when success is False).
        message:       Human-readable explanation (only on denial).
        required_plan: Minimum plan tier key for PLAN_UPGRADE_REQUIRED.
        limit:         Plan cap for LIMIT_REACHED.
    """

    success: bool
    error_code: Optional[str] = None
    message: Optional[str] = None
    required_plan: Optional[str] = None
    limit: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.success, bool):
            raise ValueError("success must be a bool.")

        if self.success:
            if self.error_code is not None:
                raise ValueError("error_code must be None when success is True.")
            return

        if self.error_code not in ErrorCode.ALL:
            raise ValueError(
                f"error_code '{self.error_code}' not valid. "
                f"Must be one of: {sorted(ErrorCode.ALL)}"
            )

        if not self.message or not isinstance(self.message, str):
            raise ValueError("message must be a non-empty string on denial.")

    @classmethod
    def allow(cls) -> AccessDecision:
        return cls(success=True)

    @classmethod
    def deny(
        cls,
        code: str,
        message: str,
        *,
        required_plan: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> AccessDecision:
        return cls(
            success=False,
            error_code=code,
            message=message,
            required_plan=required_plan,
            limit=limit,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the result shape returned by server actions."""
        if self.success:
            return {"success": True}

        payload: dict[str, Any] = {
            "success": False,
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.required_plan is not None:
            payload["required_plan"] = self.required_plan
        if self.limit is not None:
            payload["limit"] = self.limit
        return payload
