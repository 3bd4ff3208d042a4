"""
Hisaab Analytics — Demand Forecasting
=====================================
Predicts 30-day demand for a product from its recent sales.

Two strategies share one interface:
- HeuristicForecaster: weighted moving average of the last three periods.
- RemoteModelForecaster: asks an injected model client, and falls back
  to the heuristic whenever the client fails or answers out of shape.

select_forecaster() picks one when the service is built. Nothing is
imported or probed at call time.
"""

from __future__ import annotations

import json
import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional, Protocol, Sequence

logger = logging.getLogger("hisaab.analytics")

WMA_WEIGHTS = (Decimal("0.2"), Decimal("0.3"), Decimal("0.5"))
NO_HISTORY_QUANTITY = 10
NO_HISTORY_CONFIDENCE = 0.1
ZERO_WMA_QUANTITY = 5
HEURISTIC_CONFIDENCE = 0.5


# ══════════════════════════════════════════════════════════════
# INPUTS & OUTPUT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Product:
    product_id: str
    name: str = ""
    sku: str = ""
    stock: int = 0


@dataclass(frozen=True)
class SalesRecord:
    period: str
    quantity: Decimal = Decimal("0")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> SalesRecord:
        raw = data.get("quantity")
        try:
            quantity = Decimal(str(raw)) if raw is not None else Decimal("0")
        except InvalidOperation:
            quantity = Decimal("0")
        if not quantity.is_finite():
            quantity = Decimal("0")
        return cls(period=str(data.get("date", data.get("period", ""))), quantity=quantity)


@dataclass(frozen=True)
class Forecast:
    product_id: str
    forecasted_quantity: int
    confidence_score: float
    reasoning: str
    risk_factors: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence_score <= 1.0:
            raise ValueError(
                f"Confidence must be between 0 and 1, got {self.confidence_score}."
            )
        if self.forecasted_quantity < 0:
            raise ValueError("forecasted_quantity must be non-negative.")

    def to_dict(self) -> dict[str, Any]:
        return {
            "product_id": self.product_id,
            "forecasted_quantity": self.forecasted_quantity,
            "confidence_score": self.confidence_score,
            "reasoning": self.reasoning,
            "risk_factors": list(self.risk_factors),
        }


def _normalize_history(sales_history: Optional[Sequence[Any]]) -> tuple[SalesRecord, ...]:
    records = []
    for item in sales_history or ():
        if isinstance(item, SalesRecord):
            records.append(item)
        else:
            records.append(SalesRecord.from_mapping(item))
    return tuple(records)


# ══════════════════════════════════════════════════════════════
# STRATEGY INTERFACE
# ══════════════════════════════════════════════════════════════

class Forecaster(ABC):
    @property
    @abstractmethod
    def strategy_name(self) -> str:
        ...

    @abstractmethod
    def forecast(
        self,
        product: Product,
        sales_history: Optional[Sequence[Any]],
    ) -> Forecast:
        """
        Args:
            product: Product being forecast
            sales_history: Oldest-first records (SalesRecord or
                mappings with "date" and "quantity")
        """
        ...


class HeuristicForecaster(Forecaster):
    """
    Weighted moving average over the last three periods, most recent
    weighted highest. With fewer than three periods the leading weights
    are used, so a short history forecasts low.
    """

    @property
    def strategy_name(self) -> str:
        return "heuristic"

    def forecast(self, product, sales_history) -> Forecast:
        recent = _normalize_history(sales_history)[-len(WMA_WEIGHTS):]
        if not recent:
            return Forecast(
                product_id=product.product_id,
                forecasted_quantity=NO_HISTORY_QUANTITY,
                confidence_score=NO_HISTORY_CONFIDENCE,
                reasoning="Insufficient data",
            )

        wma = sum(
            (record.quantity * weight for record, weight in zip(recent, WMA_WEIGHTS)),
            Decimal("0"),
        )
        quantity = math.ceil(wma) if wma > 0 else 0
        return Forecast(
            product_id=product.product_id,
            forecasted_quantity=quantity or ZERO_WMA_QUANTITY,
            confidence_score=HEURISTIC_CONFIDENCE,
            reasoning="Calculated using weighted moving average of recent sales",
        )


# ══════════════════════════════════════════════════════════════
# REMOTE MODEL STRATEGY
# ══════════════════════════════════════════════════════════════

class ForecastModelClient(Protocol):
    """
    Anything that turns a prompt into a structured forecast mapping with
    forecasted_quantity, confidence_score, reasoning and risk_factors.
    """

    def generate_forecast(self, prompt: str) -> Mapping[str, Any]:
        ...


def build_forecast_prompt(product: Product, history: Sequence[SalesRecord]) -> str:
    rows = [{"date": r.period, "quantity": str(r.quantity)} for r in history]
    return (
        f"Analyze the following sales history for product: {product.name} "
        f"(SKU: {product.sku}).\n"
        f"Current Stock: {product.stock}\n"
        f"Historical Sales (Last 6 months):\n"
        f"{json.dumps(rows, indent=2)}\n\n"
        f"Based on this data, predict the demand for the next 30 days."
    )


class RemoteModelForecaster(Forecaster):
    def __init__(
        self,
        client: ForecastModelClient,
        fallback: Optional[Forecaster] = None,
    ) -> None:
        self._client = client
        self._fallback = fallback or HeuristicForecaster()

    @property
    def strategy_name(self) -> str:
        return "remote_model"

    def forecast(self, product, sales_history) -> Forecast:
        history = _normalize_history(sales_history)
        try:
            answer = self._client.generate_forecast(
                build_forecast_prompt(product, history)
            )
            return Forecast(
                product_id=product.product_id,
                forecasted_quantity=max(0, math.ceil(float(answer["forecasted_quantity"]))),
                confidence_score=float(answer["confidence_score"]),
                reasoning=str(answer.get("reasoning", "")),
                risk_factors=tuple(str(r) for r in answer.get("risk_factors", ())),
            )
        except Exception as exc:
            logger.warning(
                f"Model forecast failed for product {product.product_id}: {exc}. "
                f"Falling back to {self._fallback.strategy_name}."
            )
            return self._fallback.forecast(product, history)


def select_forecaster(client: Optional[ForecastModelClient] = None) -> Forecaster:
    """Remote model when a client is configured, heuristic otherwise."""
    if client is None:
        return HeuristicForecaster()
    return RemoteModelForecaster(client)
