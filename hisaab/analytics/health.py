"""
Hisaab Analytics — Business Health Score
========================================
A 0–100 score from a handful of dashboard metrics.

Starts at 70 and adjusts in this order:
  1. Gross margin          +15 / +10 / +5, or −10 when below 5% on real revenue
  2. Stock health          +10 above 95% in stock, −15 below 70%
  3. Receivables           −15 when over half of revenue
     Pending invoices      −5 above 10
  4. Revenue over 1M       +5
Then clamped to [0, 100].
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Any, Mapping, Union

from hisaab.tax.config import to_decimal

BASE_SCORE = 70
HIGH_REVENUE_THRESHOLD = Decimal("1000000")
PENDING_INVOICE_THRESHOLD = 10

_COUNT_FIELDS = frozenset({"low_stock_count", "total_products", "pending_invoices"})

# Dashboard payloads use camelCase keys.
_FIELD_ALIASES = {
    "grossProfit": "gross_profit",
    "inventoryValue": "inventory_value",
    "accountsReceivable": "accounts_receivable",
    "lowStockCount": "low_stock_count",
    "totalProducts": "total_products",
    "pendingInvoices": "pending_invoices",
}


def _to_count(value: Any, *, field_name: str) -> int:
    parsed = to_decimal(value, field_name=field_name)
    if parsed != parsed.to_integral_value():
        raise ValueError(f"{field_name} must be a whole number.")
    return int(parsed)


@dataclass(frozen=True)
class BusinessMetrics:
    revenue: Decimal = Decimal("0")
    gross_profit: Decimal = Decimal("0")
    inventory_value: Decimal = Decimal("0")
    accounts_receivable: Decimal = Decimal("0")
    low_stock_count: int = 0
    total_products: int = 0
    pending_invoices: int = 0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> BusinessMetrics:
        """
        Missing or None fields count as zero. camelCase keys are mapped to
        their field names; any other unknown key is rejected.
        """
        known = {f.name for f in fields(cls)}
        values = {}
        seen = set()
        for key, raw in data.items():
            name = _FIELD_ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown metric '{key}'.")
            if name in seen:
                raise ValueError(f"Metric '{name}' given more than once.")
            seen.add(name)
            if raw is None:
                continue
            if name in _COUNT_FIELDS:
                values[name] = _to_count(raw, field_name=name)
            else:
                values[name] = to_decimal(raw, field_name=name)
        return cls(**values)


def _margin_adjustment(revenue: Decimal, gross_profit: Decimal) -> int:
    margin = gross_profit / revenue if revenue > 0 else Decimal("0")
    if margin > Decimal("0.4"):
        return 15
    if margin > Decimal("0.2"):
        return 10
    if margin > Decimal("0.1"):
        return 5
    if margin < Decimal("0.05") and revenue > 0:
        return -10
    return 0


def _stock_adjustment(total_products: int, low_stock_count: int) -> int:
    if total_products > 0:
        stock_health = Decimal(total_products - low_stock_count) / Decimal(total_products)
    else:
        stock_health = Decimal("1")
    if stock_health > Decimal("0.95"):
        return 10
    if stock_health < Decimal("0.7"):
        return -15
    return 0


def calculate_business_health(
    metrics: Union[BusinessMetrics, Mapping[str, Any]],
) -> int:
    if not isinstance(metrics, BusinessMetrics):
        metrics = BusinessMetrics.from_mapping(metrics)

    revenue = metrics.revenue
    score = BASE_SCORE
    score += _margin_adjustment(revenue, metrics.gross_profit)
    score += _stock_adjustment(metrics.total_products, metrics.low_stock_count)

    if revenue > 0 and metrics.accounts_receivable > revenue * Decimal("0.5"):
        score -= 15
    if metrics.pending_invoices > PENDING_INVOICE_THRESHOLD:
        score -= 5

    if revenue > HIGH_REVENUE_THRESHOLD:
        score += 5

    return min(100, max(0, score))


# ══════════════════════════════════════════════════════════════
# STATUS BANDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class HealthStatus:
    label: str
    color: str
    bg: str
    description: str

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "color": self.color,
            "bg": self.bg,
            "description": self.description,
        }


EXCELLENT = HealthStatus(
    "Excellent", "text-emerald-600", "bg-emerald-50",
    "Business is thriving with optimal efficiency.",
)
GOOD = HealthStatus(
    "Good", "text-blue-600", "bg-blue-50",
    "Strong performance with minor optimization room.",
)
FAIR = HealthStatus(
    "Fair", "text-amber-600", "bg-amber-50",
    "Steady but watch your cash flow closely.",
)
AT_RISK = HealthStatus(
    "At Risk", "text-rose-600", "bg-rose-50",
    "Immediate operational audit recommended.",
)


def get_health_status(score: int) -> HealthStatus:
    if score >= 90:
        return EXCELLENT
    if score >= 70:
        return GOOD
    if score >= 50:
        return FAIR
    return AT_RISK
