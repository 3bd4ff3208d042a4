"""
Hisaab RBAC — roles, permissions and navigation gating.
"""

from hisaab.rbac.catalog import (
    ALL_ROLES,
    DOMAIN_DEFAULT_ROLES,
    NAV_PERMISSION_MAP,
    PERMISSION_DEFINITIONS,
    ROLE_HIERARCHY,
    VALID_PERMISSIONS,
)
from hisaab.rbac.evaluator import (
    ROLES,
    get_nav_item_access,
    get_permissions_by_module,
    get_permissions_for_role,
    get_suggested_roles,
    has_permission,
    is_role_at_least,
    require_permission,
)
from hisaab.rbac.models import Membership, NavItemAccess, Role
from hisaab.rbac.provider import (
    InMemoryMembershipProvider,
    MembershipProvider,
    get_user_business_role,
    verify_business_access,
)

__all__ = [
    "ALL_ROLES",
    "DOMAIN_DEFAULT_ROLES",
    "NAV_PERMISSION_MAP",
    "PERMISSION_DEFINITIONS",
    "ROLE_HIERARCHY",
    "ROLES",
    "VALID_PERMISSIONS",
    "InMemoryMembershipProvider",
    "Membership",
    "MembershipProvider",
    "NavItemAccess",
    "Role",
    "get_nav_item_access",
    "get_permissions_by_module",
    "get_permissions_for_role",
    "get_suggested_roles",
    "get_user_business_role",
    "has_permission",
    "is_role_at_least",
    "require_permission",
    "verify_business_access",
]
