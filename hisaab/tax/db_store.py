"""
Hisaab Tax — DB-backed Configuration Store
==========================================
One tax configuration row per business in the tenancy tables.
"""

from __future__ import annotations

import uuid
from typing import Optional

from django.db import transaction

from hisaab.common.errors import BusinessNotFoundError
from hisaab.tax.config import DEFAULT_FILER_STATUS, DEFAULT_SALES_TAX_RATE, TaxConfiguration

_STORED_FIELDS = (
    "ntn_number",
    "srn_number",
    "filer_status",
    "sales_tax_rate",
    "provincial_tax_rate",
    "withholding_tax_applicable",
    "withholding_tax_rate",
    "withholding_tax_category",
    "gst_number",
    "gst_rate",
)


class DbTaxConfigStore:
    def get_active(self, business_id: uuid.UUID) -> Optional[TaxConfiguration]:
        from hisaab.tenancy.models import TaxConfiguration as TaxConfigurationRow

        row = (
            TaxConfigurationRow.objects.filter(business_id=business_id, is_active=True)
            .values(*_STORED_FIELDS)
            .first()
        )
        if row is None:
            return None
        return TaxConfiguration.from_record(row)

    def upsert(
        self, business_id: uuid.UUID, config: TaxConfiguration
    ) -> TaxConfiguration:
        from hisaab.tenancy.models import Business
        from hisaab.tenancy.models import TaxConfiguration as TaxConfigurationRow

        defaults = {name: getattr(config, name) for name in _STORED_FIELDS}
        # Non-null columns keep their defaults.
        if defaults["sales_tax_rate"] is None:
            defaults["sales_tax_rate"] = DEFAULT_SALES_TAX_RATE
        if defaults["filer_status"] is None:
            defaults["filer_status"] = DEFAULT_FILER_STATUS
        defaults["is_active"] = True

        with transaction.atomic():
            if not Business.objects.filter(business_id=business_id).exists():
                raise BusinessNotFoundError(business_id)
            row, _ = TaxConfigurationRow.objects.update_or_create(
                business_id=business_id,
                defaults=defaults,
            )

        return TaxConfiguration.from_record(
            {name: getattr(row, name) for name in _STORED_FIELDS}
        )
