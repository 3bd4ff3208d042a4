"""
Hisaab Common — Public API
==========================
Decision values and error types shared by the guard, RBAC and plan layers.
"""

from hisaab.common.errors import (
    AccessDeniedError,
    BusinessAccessError,
    BusinessNotFoundError,
    HisaabError,
)
from hisaab.common.rejection import AccessDecision, ErrorCode

__all__ = [
    "AccessDecision",
    "ErrorCode",
    "HisaabError",
    "AccessDeniedError",
    "BusinessAccessError",
    "BusinessNotFoundError",
]
