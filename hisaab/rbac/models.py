"""
Hisaab RBAC — Immutable Role/Membership Models
==============================================
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Optional

from hisaab.rbac.catalog import ROLE_HIERARCHY, VALID_PERMISSIONS

MEMBERSHIP_STATUS_ACTIVE = "active"
MEMBERSHIP_STATUS_INACTIVE = "inactive"
VALID_MEMBERSHIP_STATUSES = frozenset({
    MEMBERSHIP_STATUS_ACTIVE,
    MEMBERSHIP_STATUS_INACTIVE,
})


@dataclass(frozen=True)
class Role:
    role_id: str
    rank: int
    permissions: tuple[str, ...]

    def __post_init__(self):
        if not self.role_id or not isinstance(self.role_id, str):
            raise ValueError("role_id must be a non-empty string.")

        if self.role_id not in ROLE_HIERARCHY:
            raise ValueError(
                f"role_id '{self.role_id}' not valid. "
                f"Must be one of: {sorted(ROLE_HIERARCHY)}"
            )

        if ROLE_HIERARCHY[self.role_id] != self.rank:
            raise ValueError(
                f"rank {self.rank} does not match hierarchy rank "
                f"{ROLE_HIERARCHY[self.role_id]} for '{self.role_id}'."
            )

        if not isinstance(self.permissions, tuple):
            raise ValueError("permissions must be a tuple.")

        normalized = tuple(sorted(set(self.permissions)))
        if not normalized:
            raise ValueError("permissions must contain at least one value.")

        for permission in normalized:
            if permission not in VALID_PERMISSIONS:
                raise ValueError(f"permission '{permission}' not valid.")

        object.__setattr__(self, "permissions", normalized)


@dataclass(frozen=True)
class Membership:
    """A user's role inside one business."""

    user_id: str
    business_id: uuid.UUID
    role: str
    status: str = MEMBERSHIP_STATUS_ACTIVE

    def __post_init__(self):
        if not self.user_id or not isinstance(self.user_id, str):
            raise ValueError("user_id must be a non-empty string.")

        if not isinstance(self.business_id, uuid.UUID):
            raise ValueError("business_id must be UUID.")

        if self.role not in ROLE_HIERARCHY:
            raise ValueError(
                f"role '{self.role}' not valid. "
                f"Must be one of: {sorted(ROLE_HIERARCHY)}"
            )

        if self.status not in VALID_MEMBERSHIP_STATUSES:
            raise ValueError(
                f"status '{self.status}' not valid. "
                f"Must be one of: {sorted(VALID_MEMBERSHIP_STATUSES)}"
            )

    @property
    def is_active(self) -> bool:
        return self.status == MEMBERSHIP_STATUS_ACTIVE


@dataclass(frozen=True)
class NavItemAccess:
    """Sidebar state for one navigation entry."""

    visible: bool
    locked: bool = False
    required_plan: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "visible": self.visible,
            "locked": self.locked,
            "required_plan": self.required_plan,
        }
