"""
Hisaab Tax — Pakistani Tax Service
==================================
Per-business FBR configuration: NTN/SRN registration, filer status and
the rates the invoice calculator applies.

When a MembershipProvider is supplied, every call names the acting user:
reads require an active membership, writes additionally require the
tax.configure permission.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Optional

from hisaab.rbac.evaluator import require_permission
from hisaab.rbac.provider import MembershipProvider, get_user_business_role
from hisaab.tax.calculator import validate_ntn, validate_srn
from hisaab.tax.config import (
    DEFAULT_FILER_STATUS,
    DEFAULT_TAX_CONFIGURATION,
    VALID_FILER_STATUSES,
    TaxConfigStore,
    TaxConfiguration,
)

logger = logging.getLogger("hisaab.tax")

PERMISSION_TAX_CONFIGURE = "tax.configure"


@dataclass(frozen=True)
class ConfigureTaxRequest:
    business_id: uuid.UUID
    filer_status: str = DEFAULT_FILER_STATUS
    ntn_number: Optional[str] = None
    srn_number: Optional[str] = None
    sales_tax_rate: Any = None
    provincial_tax_rate: Any = None
    withholding_tax_applicable: Any = False
    withholding_tax_rate: Any = None
    withholding_tax_category: Optional[str] = None
    gst_number: Optional[str] = None
    gst_rate: Any = None

    def __post_init__(self):
        if not isinstance(self.business_id, uuid.UUID):
            raise ValueError("business_id must be UUID.")

        if self.filer_status not in VALID_FILER_STATUSES:
            raise ValueError(
                f"filer_status '{self.filer_status}' not valid. "
                f"Must be one of: {sorted(VALID_FILER_STATUSES)}"
            )

        if self.ntn_number and not validate_ntn(self.ntn_number):
            raise ValueError(
                f"ntn_number '{self.ntn_number}' not valid. Expected format 1234567-8."
            )

        if self.srn_number and not validate_srn(self.srn_number):
            raise ValueError(
                f"srn_number '{self.srn_number}' not valid. Must be at least 8 characters."
            )

    def to_configuration(self) -> TaxConfiguration:
        # Rate validation happens in TaxConfiguration.
        return TaxConfiguration.from_record({
            "sales_tax_rate": self.sales_tax_rate,
            "provincial_tax_rate": self.provincial_tax_rate,
            "withholding_tax_applicable": self.withholding_tax_applicable,
            "withholding_tax_rate": self.withholding_tax_rate,
            "withholding_tax_category": self.withholding_tax_category,
            "filer_status": self.filer_status,
            "ntn_number": self.ntn_number,
            "srn_number": self.srn_number,
            "gst_number": self.gst_number,
            "gst_rate": self.gst_rate,
        })


class PakistaniTaxService:
    def __init__(
        self,
        store: TaxConfigStore,
        memberships: Optional[MembershipProvider] = None,
    ):
        self._store = store
        self._memberships = memberships

    def configure_tax(
        self,
        request: ConfigureTaxRequest,
        user_id: Optional[str] = None,
    ) -> TaxConfiguration:
        """Create or replace the business's active tax configuration."""
        if self._memberships is not None:
            role = get_user_business_role(user_id, request.business_id, self._memberships)
            require_permission(role, PERMISSION_TAX_CONFIGURE)

        config = self._store.upsert(request.business_id, request.to_configuration())
        logger.info(
            f"Tax configuration saved for business {request.business_id} "
            f"(filer_status={config.filer_status})"
        )
        return config

    def get_tax_config(
        self,
        business_id: uuid.UUID,
        user_id: Optional[str] = None,
    ) -> TaxConfiguration:
        """Active configuration, or the 17% Non-Filer default when none is stored."""
        if self._memberships is not None:
            get_user_business_role(user_id, business_id, self._memberships)

        config = self._store.get_active(business_id)
        if config is None:
            return DEFAULT_TAX_CONFIGURATION
        return config
