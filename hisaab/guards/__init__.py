"""
Hisaab Guards — role + plan gate for server-side actions.
"""

from hisaab.guards.access import (
    AccessRequest,
    enforce_access,
    guarded_action,
    validate_access,
)
from hisaab.guards.plan_guard import check_plan_feature, check_plan_limit, with_plan

__all__ = [
    "AccessRequest",
    "check_plan_feature",
    "check_plan_limit",
    "enforce_access",
    "guarded_action",
    "validate_access",
    "with_plan",
]
