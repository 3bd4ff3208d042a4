"""
Hisaab Tax — Pakistani FBR tax configuration and invoice arithmetic.
"""

from hisaab.tax.calculator import (
    TaxBreakdown,
    TaxRateBreakdown,
    calculate_provincial_tax,
    calculate_sales_tax,
    calculate_total_tax,
    calculate_withholding_tax,
    generate_fbr_invoice_number,
    get_tax_rate_by_filer_status,
    validate_ntn,
    validate_srn,
)
from hisaab.tax.config import (
    DEFAULT_TAX_CONFIGURATION,
    FILER,
    NON_FILER,
    InMemoryTaxConfigStore,
    TaxConfigStore,
    TaxConfiguration,
)
from hisaab.tax.rates import (
    INCOME_TAX_SLABS,
    PROVINCIAL_SALES_TAX_RATES,
    calculate_income_tax,
    get_provincial_tax_rate,
)
from hisaab.tax.service import ConfigureTaxRequest, PakistaniTaxService

__all__ = [
    "DEFAULT_TAX_CONFIGURATION",
    "FILER",
    "INCOME_TAX_SLABS",
    "NON_FILER",
    "PROVINCIAL_SALES_TAX_RATES",
    "ConfigureTaxRequest",
    "InMemoryTaxConfigStore",
    "PakistaniTaxService",
    "TaxBreakdown",
    "TaxConfigStore",
    "TaxConfiguration",
    "TaxRateBreakdown",
    "calculate_income_tax",
    "calculate_provincial_tax",
    "calculate_sales_tax",
    "calculate_total_tax",
    "calculate_withholding_tax",
    "generate_fbr_invoice_number",
    "get_provincial_tax_rate",
    "get_tax_rate_by_filer_status",
    "validate_ntn",
    "validate_srn",
]
