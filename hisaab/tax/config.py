"""
Hisaab Tax — Business Tax Configuration
=======================================
Per-business tax settings as an immutable value.

Stored records arrive loosely typed (strings, floats, missing keys).
from_record() normalizes them once at the boundary, so the calculator
only ever sees Decimal rates or None.

Rates are percentages: 17 means 17%.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, Mapping, Optional, Protocol

FILER = "Filer"
NON_FILER = "Non-Filer"
VALID_FILER_STATUSES = frozenset({FILER, NON_FILER})

DEFAULT_SALES_TAX_RATE = Decimal("17.00")
DEFAULT_FILER_STATUS = NON_FILER

_RATE_FIELDS = (
    "sales_tax_rate",
    "provincial_tax_rate",
    "withholding_tax_rate",
    "gst_rate",
)

MAX_RATE = Decimal("100")

_TRUE_FLAGS = frozenset({"1", "true", "yes", "on"})
_FALSE_FLAGS = frozenset({"0", "false", "no", "off"})


def to_decimal(value: Any, *, field_name: str) -> Decimal:
    """Parse a finite Decimal. NaN and infinities are rejected."""
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be numeric.")
    if isinstance(value, Decimal):
        parsed = value
    else:
        try:
            parsed = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValueError(f"{field_name} must be numeric.") from exc
    if not parsed.is_finite():
        raise ValueError(f"{field_name} must be numeric.")
    return parsed


def to_flag(value: Any, *, field_name: str) -> bool:
    if value is None or value == "":
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        cleaned = value.strip().lower()
        if cleaned in _TRUE_FLAGS:
            return True
        if cleaned in _FALSE_FLAGS:
            return False
    raise ValueError(
        f"{field_name} must be a boolean or one of: "
        f"{sorted(_TRUE_FLAGS | _FALSE_FLAGS)}"
    )


def _optional_rate(value: Any, *, field_name: str) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    return to_decimal(value, field_name=field_name)


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None


@dataclass(frozen=True)
class TaxConfiguration:
    """
    Tax settings for one business.

    A None rate means "not configured": the calculator substitutes its
    default. An explicit zero is kept as zero.
    """

    sales_tax_rate: Optional[Decimal] = None
    provincial_tax_rate: Optional[Decimal] = None
    withholding_tax_applicable: bool = False
    withholding_tax_rate: Optional[Decimal] = None
    filer_status: Optional[str] = None
    withholding_tax_category: Optional[str] = None
    ntn_number: Optional[str] = None
    srn_number: Optional[str] = None
    gst_number: Optional[str] = None
    gst_rate: Optional[Decimal] = None

    def __post_init__(self):
        for name in _RATE_FIELDS:
            value = getattr(self, name)
            if value is None:
                continue
            if not isinstance(value, Decimal):
                raise ValueError(f"{name} must be Decimal.")
            if not value.is_finite() or value < 0:
                raise ValueError(f"{name} must be a non-negative number.")
            if value > MAX_RATE:
                raise ValueError(f"{name} must not exceed {MAX_RATE} percent.")

        if not isinstance(self.withholding_tax_applicable, bool):
            raise ValueError("withholding_tax_applicable must be bool.")

        if (
            self.filer_status is not None
            and self.filer_status not in VALID_FILER_STATUSES
        ):
            raise ValueError(
                f"filer_status '{self.filer_status}' not valid. "
                f"Must be one of: {sorted(VALID_FILER_STATUSES)}"
            )

    @classmethod
    def from_record(cls, record: Optional[Mapping[str, Any]]) -> TaxConfiguration:
        """Build from a loosely typed mapping (DB row, request payload)."""
        if record is None:
            return cls()

        return cls(
            sales_tax_rate=_optional_rate(
                record.get("sales_tax_rate"), field_name="sales_tax_rate"
            ),
            provincial_tax_rate=_optional_rate(
                record.get("provincial_tax_rate"), field_name="provincial_tax_rate"
            ),
            withholding_tax_applicable=to_flag(
                record.get("withholding_tax_applicable"),
                field_name="withholding_tax_applicable",
            ),
            withholding_tax_rate=_optional_rate(
                record.get("withholding_tax_rate"), field_name="withholding_tax_rate"
            ),
            filer_status=_optional_text(record.get("filer_status")),
            withholding_tax_category=_optional_text(record.get("withholding_tax_category")),
            ntn_number=_optional_text(record.get("ntn_number")),
            srn_number=_optional_text(record.get("srn_number")),
            gst_number=_optional_text(record.get("gst_number")),
            gst_rate=_optional_rate(record.get("gst_rate"), field_name="gst_rate"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


# Returned when a business has no active configuration.
DEFAULT_TAX_CONFIGURATION = TaxConfiguration(
    sales_tax_rate=DEFAULT_SALES_TAX_RATE,
    filer_status=DEFAULT_FILER_STATUS,
    withholding_tax_applicable=False,
)


# ══════════════════════════════════════════════════════════════
# STORE PROTOCOL
# ══════════════════════════════════════════════════════════════

class TaxConfigStore(Protocol):
    def get_active(self, business_id: uuid.UUID) -> Optional[TaxConfiguration]:
        ...

    def upsert(
        self, business_id: uuid.UUID, config: TaxConfiguration
    ) -> TaxConfiguration:
        ...


class InMemoryTaxConfigStore:
    """
    Deterministic in-memory store used for bootstrap/tests.
    """

    def __init__(
        self,
        configs: Iterable[tuple[uuid.UUID, TaxConfiguration]] | None = None,
    ):
        self._configs: dict[uuid.UUID, TaxConfiguration] = {}
        for business_id, config in configs or ():
            if business_id in self._configs:
                raise ValueError(f"Duplicate tax configuration for {business_id}.")
            self._configs[business_id] = config

    def get_active(self, business_id: uuid.UUID) -> Optional[TaxConfiguration]:
        return self._configs.get(business_id)

    def upsert(
        self, business_id: uuid.UUID, config: TaxConfiguration
    ) -> TaxConfiguration:
        self._configs[business_id] = config
        return config
