"""
Hisaab RBAC — Membership Provider Protocol and In-Memory Provider
=================================================================
"""

from __future__ import annotations

import uuid
from typing import Iterable, Optional, Protocol

from hisaab.common.errors import BusinessAccessError
from hisaab.rbac.models import Membership


class MembershipProvider(Protocol):
    def get_active_role(
        self,
        user_id: str,
        business_id: uuid.UUID,
    ) -> Optional[str]:
        ...


class InMemoryMembershipProvider:
    """
    Deterministic in-memory provider used for bootstrap/tests.
    """

    def __init__(self, memberships: Iterable[Membership] | None = None):
        self._memberships: dict[tuple[str, uuid.UUID], Membership] = {}

        for membership in memberships or ():
            key = (membership.user_id, membership.business_id)
            if key in self._memberships:
                raise ValueError(
                    f"Duplicate membership for user '{membership.user_id}' "
                    f"in business {membership.business_id}."
                )
            self._memberships[key] = membership

    def get_active_role(
        self,
        user_id: str,
        business_id: uuid.UUID,
    ) -> Optional[str]:
        membership = self._memberships.get((user_id, business_id))
        if membership is None or not membership.is_active:
            return None
        return membership.role


# ══════════════════════════════════════════════════════════════
# ACCESS VERIFICATION
# ══════════════════════════════════════════════════════════════

def get_user_business_role(
    user_id: Optional[str],
    business_id: Optional[uuid.UUID],
    provider: MembershipProvider,
) -> str:
    """
    Return the user's active role in the business.

    Raises BusinessAccessError on missing credentials or when the user
    has no active membership.
    """
    if not user_id or business_id is None:
        raise BusinessAccessError("Missing credentials")

    role = provider.get_active_role(user_id, business_id)
    if role is None:
        raise BusinessAccessError("No access to this business")
    return role


def verify_business_access(
    user_id: Optional[str],
    business_id: Optional[uuid.UUID],
    provider: MembershipProvider,
) -> bool:
    get_user_business_role(user_id, business_id, provider)
    return True
