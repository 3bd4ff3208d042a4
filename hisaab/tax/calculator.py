"""
Hisaab Tax — Invoice Tax Calculator
===================================
Pure arithmetic over a TaxConfiguration. Amounts and rates are Decimal
and are not rounded here; presentation rounds.

Defaults when a rate is not configured:
  sales tax        17%
  provincial tax    0%
  withholding tax   0% (and only when applicable)

total_tax counts sales + provincial only. Withholding is deducted from
net_amount but not added into total_tax.
"""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Union

from hisaab.tax.config import (
    DEFAULT_FILER_STATUS,
    DEFAULT_SALES_TAX_RATE,
    NON_FILER,
    TaxConfiguration,
    to_decimal,
)
from hisaab.time import Clock, SystemClock

ZERO = Decimal("0")
HUNDRED = Decimal("100")

NTN_PATTERN = re.compile(r"[0-9]{7}-[0-9]")
SRN_MIN_LENGTH = 8

TaxConfigInput = Union[TaxConfiguration, Mapping[str, Any], None]


def _as_config(config: TaxConfigInput) -> TaxConfiguration:
    if isinstance(config, TaxConfiguration):
        return config
    return TaxConfiguration.from_record(config)


def _rate_or(value: Optional[Decimal], default: Decimal) -> Decimal:
    return default if value is None else value


# ══════════════════════════════════════════════════════════════
# COMPONENT TAXES
# ══════════════════════════════════════════════════════════════

def calculate_sales_tax(amount: Any, config: TaxConfigInput = None) -> Decimal:
    """
    Sales tax at the configured rate, 17% when none is configured.

    An explicit rate of 0 is honoured (zero-rated supplies) and does not
    fall back to the default.
    """
    rate = _rate_or(_as_config(config).sales_tax_rate, DEFAULT_SALES_TAX_RATE)
    return to_decimal(amount, field_name="amount") * rate / HUNDRED


def calculate_provincial_tax(amount: Any, config: TaxConfigInput = None) -> Decimal:
    rate = _rate_or(_as_config(config).provincial_tax_rate, ZERO)
    return to_decimal(amount, field_name="amount") * rate / HUNDRED


def calculate_withholding_tax(amount: Any, config: TaxConfigInput = None) -> Decimal:
    resolved = _as_config(config)
    if not resolved.withholding_tax_applicable:
        return ZERO
    rate = _rate_or(resolved.withholding_tax_rate, ZERO)
    return to_decimal(amount, field_name="amount") * rate / HUNDRED


# ══════════════════════════════════════════════════════════════
# INVOICE TOTALS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TaxRateBreakdown:
    subtotal: Decimal
    sales_tax_rate: Decimal
    provincial_tax_rate: Decimal
    withholding_tax_rate: Decimal
    filer_status: str


@dataclass(frozen=True)
class TaxBreakdown:
    sales_tax: Decimal
    provincial_tax: Decimal
    withholding_tax: Decimal
    total_tax: Decimal
    net_amount: Decimal
    breakdown: TaxRateBreakdown

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sales_tax": self.sales_tax,
            "provincial_tax": self.provincial_tax,
            "withholding_tax": self.withholding_tax,
            "total_tax": self.total_tax,
            "net_amount": self.net_amount,
            "breakdown": {
                "subtotal": self.breakdown.subtotal,
                "sales_tax_rate": self.breakdown.sales_tax_rate,
                "provincial_tax_rate": self.breakdown.provincial_tax_rate,
                "withholding_tax_rate": self.breakdown.withholding_tax_rate,
                "filer_status": self.breakdown.filer_status,
            },
        }


def calculate_total_tax(subtotal: Any, config: TaxConfigInput = None) -> TaxBreakdown:
    resolved = _as_config(config)
    amount = to_decimal(subtotal, field_name="subtotal")

    sales_tax = calculate_sales_tax(amount, resolved)
    provincial_tax = calculate_provincial_tax(amount, resolved)
    withholding_tax = calculate_withholding_tax(amount, resolved)

    return TaxBreakdown(
        sales_tax=sales_tax,
        provincial_tax=provincial_tax,
        withholding_tax=withholding_tax,
        total_tax=sales_tax + provincial_tax,
        net_amount=amount + sales_tax + provincial_tax - withholding_tax,
        breakdown=TaxRateBreakdown(
            subtotal=amount,
            sales_tax_rate=_rate_or(resolved.sales_tax_rate, DEFAULT_SALES_TAX_RATE),
            provincial_tax_rate=_rate_or(resolved.provincial_tax_rate, ZERO),
            withholding_tax_rate=_rate_or(resolved.withholding_tax_rate, ZERO),
            filer_status=resolved.filer_status or DEFAULT_FILER_STATUS,
        ),
    )


# ══════════════════════════════════════════════════════════════
# IDENTIFIERS & FILER STATUS
# ══════════════════════════════════════════════════════════════

def validate_ntn(ntn: Optional[str]) -> bool:
    """NTN is seven digits, a hyphen, and a check digit: 1234567-8."""
    if not ntn or not isinstance(ntn, str):
        return False
    return NTN_PATTERN.fullmatch(ntn) is not None


def validate_srn(srn: Optional[str]) -> bool:
    if not srn or not isinstance(srn, str):
        return False
    return len(srn) >= SRN_MIN_LENGTH


def get_tax_rate_by_filer_status(base_rate: Any, filer_status: Optional[str]) -> Decimal:
    """Non-filers pay double the base rate."""
    rate = to_decimal(base_rate, field_name="base_rate")
    if filer_status == NON_FILER:
        return rate * 2
    return rate


def generate_fbr_invoice_number(
    business_id: Union[uuid.UUID, str],
    sequence: int,
    clock: Optional[Clock] = None,
) -> str:
    """FBR-<first 4 of business id>-<year>-<6-digit sequence>."""
    if isinstance(sequence, bool) or not isinstance(sequence, int) or sequence < 0:
        raise ValueError("sequence must be a non-negative integer.")

    prefix = str(business_id)[:4].upper()
    if not prefix:
        raise ValueError("business_id must be non-empty.")

    year = (clock or SystemClock()).now_utc().year
    return f"FBR-{prefix}-{year}-{sequence:06d}"
