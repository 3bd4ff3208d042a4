"""
Tests for hisaab.rbac.provider — membership lookup and business access.
"""

import uuid

import pytest

from hisaab.common import BusinessAccessError
from hisaab.rbac import (
    InMemoryMembershipProvider,
    Membership,
    get_user_business_role,
    verify_business_access,
)
from hisaab.rbac.models import MEMBERSHIP_STATUS_INACTIVE

BUSINESS_ID = uuid.uuid5(uuid.NAMESPACE_URL, "hisaab-membership-business")
OTHER_BUSINESS_ID = uuid.uuid5(uuid.NAMESPACE_URL, "hisaab-membership-other")


@pytest.fixture
def provider():
    return InMemoryMembershipProvider(
        memberships=(
            Membership(user_id="u-owner", business_id=BUSINESS_ID, role="owner"),
            Membership(
                user_id="u-former",
                business_id=BUSINESS_ID,
                role="cashier",
                status=MEMBERSHIP_STATUS_INACTIVE,
            ),
        )
    )


class TestMembershipModel:
    def test_rejects_unknown_role(self):
        with pytest.raises(ValueError, match="role"):
            Membership(user_id="u", business_id=BUSINESS_ID, role="intern")

    def test_rejects_non_uuid_business(self):
        with pytest.raises(ValueError, match="UUID"):
            Membership(user_id="u", business_id="biz-1", role="owner")

    def test_rejects_unknown_status(self):
        with pytest.raises(ValueError, match="status"):
            Membership(user_id="u", business_id=BUSINESS_ID, role="owner", status="banned")


class TestInMemoryProvider:
    def test_duplicate_membership_rejected(self):
        member = Membership(user_id="u", business_id=BUSINESS_ID, role="owner")
        with pytest.raises(ValueError, match="Duplicate"):
            InMemoryMembershipProvider(memberships=(member, member))

    def test_active_role(self, provider):
        assert provider.get_active_role("u-owner", BUSINESS_ID) == "owner"

    def test_inactive_membership_has_no_role(self, provider):
        assert provider.get_active_role("u-former", BUSINESS_ID) is None


class TestBusinessAccess:
    def test_member_resolves_role(self, provider):
        assert get_user_business_role("u-owner", BUSINESS_ID, provider) == "owner"
        assert verify_business_access("u-owner", BUSINESS_ID, provider) is True

    @pytest.mark.parametrize("user_id,business_id", [(None, BUSINESS_ID), ("", BUSINESS_ID), ("u-owner", None)])
    def test_missing_credentials(self, provider, user_id, business_id):
        with pytest.raises(BusinessAccessError, match="Missing credentials"):
            verify_business_access(user_id, business_id, provider)

    def test_other_business_denied(self, provider):
        with pytest.raises(BusinessAccessError, match="No access"):
            verify_business_access("u-owner", OTHER_BUSINESS_ID, provider)

    def test_inactive_member_denied(self, provider):
        with pytest.raises(BusinessAccessError, match="No access"):
            get_user_business_role("u-former", BUSINESS_ID, provider)
