"""
Hisaab RBAC — DB-backed Membership Provider
===========================================
Resolves active memberships from the tenancy tables.
"""

from __future__ import annotations

import uuid
from typing import Optional

from hisaab.rbac.catalog import ROLE_HIERARCHY


class DbMembershipProvider:
    def get_active_role(
        self,
        user_id: str,
        business_id: uuid.UUID,
    ) -> Optional[str]:
        if not isinstance(user_id, str) or not user_id.strip():
            return None
        if not isinstance(business_id, uuid.UUID):
            return None

        from hisaab.tenancy.models import BusinessUser, MembershipStatus

        role = (
            BusinessUser.objects.filter(
                user_id=user_id.strip(),
                business_id=business_id,
                status=MembershipStatus.ACTIVE,
            )
            .values_list("role", flat=True)
            .first()
        )
        # A stored role outside the hierarchy grants nothing.
        if role not in ROLE_HIERARCHY:
            return None
        return role
