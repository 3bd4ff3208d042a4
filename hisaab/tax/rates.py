"""
Hisaab Tax — Pakistani Statutory Rate Tables
============================================
Provincial sales tax on services and the salaried income tax slabs.
Rates are percentages.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Mapping, Optional

from hisaab.tax.config import to_decimal

PROVINCIAL_SALES_TAX_RATES: Mapping[str, Decimal] = MappingProxyType({
    "punjab": Decimal("16"),
    "sindh": Decimal("13"),
    "kp": Decimal("15"),
    "balochistan": Decimal("15"),
    "islamabad": Decimal("17"),
})


def get_provincial_tax_rate(province: Optional[str]) -> Decimal:
    """Rate for a province code; unknown provinces pay none."""
    if not province:
        return Decimal("0")
    return PROVINCIAL_SALES_TAX_RATES.get(province.strip().lower(), Decimal("0"))


@dataclass(frozen=True)
class IncomeTaxSlab:
    lower: Decimal
    upper: Optional[Decimal]
    rate: Decimal

    def __post_init__(self):
        if self.lower < 0:
            raise ValueError("lower must be non-negative.")
        if self.upper is not None and self.upper <= self.lower:
            raise ValueError("upper must be greater than lower.")
        if self.rate < 0:
            raise ValueError("rate must be non-negative.")


INCOME_TAX_SLABS: tuple[IncomeTaxSlab, ...] = (
    IncomeTaxSlab(Decimal("0"), Decimal("600000"), Decimal("0")),
    IncomeTaxSlab(Decimal("600000"), Decimal("1200000"), Decimal("5")),
    IncomeTaxSlab(Decimal("1200000"), Decimal("1800000"), Decimal("10")),
    IncomeTaxSlab(Decimal("1800000"), Decimal("2500000"), Decimal("15")),
    IncomeTaxSlab(Decimal("2500000"), Decimal("3500000"), Decimal("17.5")),
    IncomeTaxSlab(Decimal("3500000"), Decimal("5000000"), Decimal("20")),
    IncomeTaxSlab(Decimal("5000000"), None, Decimal("25")),
)


def calculate_income_tax(annual_income: Any) -> Decimal:
    """
    Progressive tax: each slab's rate applies only to the part of the
    income that falls inside it.
    """
    income = to_decimal(annual_income, field_name="annual_income")
    if income <= 0:
        return Decimal("0")

    tax = Decimal("0")
    for slab in INCOME_TAX_SLABS:
        if income <= slab.lower:
            break
        top = income if slab.upper is None else min(income, slab.upper)
        tax += (top - slab.lower) * slab.rate / 100
    return tax
