"""
Hisaab Common — Exceptions
==========================
Raised-error counterparts of AccessDecision, plus the lookup errors of the
persistence seam. Catalog defects are NOT listed here; they surface from
hisaab.bootstrap at startup.
"""

from __future__ import annotations

from typing import Optional


class HisaabError(Exception):
    """Base error for the Hisaab policy core."""
    pass


class AccessDeniedError(HisaabError):
    """
    Exception-style denial for callers that prefer raise over return.

    Carries the same fields as a failed AccessDecision.
    """

    def __init__(
        self,
        code: str,
        message: str,
        *,
        required_plan: Optional[str] = None,
        limit: Optional[int] = None,
    ):
        self.code = code
        self.message = message
        self.required_plan = required_plan
        self.limit = limit
        super().__init__(message)

    @property
    def error_code(self) -> str:
        return self.code

    def to_dict(self) -> dict:
        payload = {
            "success": False,
            "error": self.message,
            "error_code": self.code,
        }
        if self.required_plan is not None:
            payload["required_plan"] = self.required_plan
        if self.limit is not None:
            payload["limit"] = self.limit
        return payload


class BusinessAccessError(HisaabError):
    """User has no active membership in the business (or no credentials)."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Unauthorized: {detail}")


class BusinessNotFoundError(HisaabError):
    """Business id does not resolve to a stored business."""

    def __init__(self, business_id):
        self.business_id = business_id
        super().__init__(f"Business not found: {business_id}")
