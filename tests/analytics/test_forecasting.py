"""
Tests for hisaab.analytics.forecasting — heuristic and remote strategies.
"""

from decimal import Decimal

import pytest

from hisaab.analytics import (
    Forecast,
    HeuristicForecaster,
    Product,
    RemoteModelForecaster,
    SalesRecord,
    select_forecaster,
)

PRODUCT = Product(product_id="p-1", name="Basmati Rice 5kg", sku="RICE-5", stock=40)


def _history(*quantities):
    return [{"date": f"2025-0{i + 1}", "quantity": q} for i, q in enumerate(quantities)]


class TestHeuristicForecaster:
    def test_no_history(self):
        forecast = HeuristicForecaster().forecast(PRODUCT, [])
        assert forecast.forecasted_quantity == 10
        assert forecast.confidence_score == 0.1
        assert forecast.reasoning == "Insufficient data"

    def test_none_history(self):
        assert HeuristicForecaster().forecast(PRODUCT, None).forecasted_quantity == 10

    def test_weighted_average_of_last_three(self):
        forecast = HeuristicForecaster().forecast(PRODUCT, _history(10, 20, 30))
        assert forecast.forecasted_quantity == 23
        assert forecast.confidence_score == 0.5

    def test_only_last_three_periods_count(self):
        forecaster = HeuristicForecaster()
        assert (
            forecaster.forecast(PRODUCT, _history(500, 10, 20, 30)).forecasted_quantity
            == 23
        )

    def test_rounds_up(self):
        # 0.2 * 1 + 0.3 * 1 + 0.5 * 1.5 = 1.25
        forecast = HeuristicForecaster().forecast(PRODUCT, _history(1, 1, "1.5"))
        assert forecast.forecasted_quantity == 2

    def test_short_history_uses_leading_weights(self):
        # 0.2 * 4 + 0.3 * 4
        assert HeuristicForecaster().forecast(PRODUCT, _history(4, 4)).forecasted_quantity == 2

    def test_zero_sales_floor(self):
        assert HeuristicForecaster().forecast(PRODUCT, _history(0, 0, 0)).forecasted_quantity == 5

    def test_garbage_quantities_count_as_zero(self):
        forecast = HeuristicForecaster().forecast(PRODUCT, _history("n/a", None, "NaN"))
        assert forecast.forecasted_quantity == 5

    def test_accepts_sales_records(self):
        history = [SalesRecord("2025-01", Decimal("10"))]
        assert HeuristicForecaster().forecast(PRODUCT, history).forecasted_quantity == 2


class FakeClient:
    def __init__(self, answer=None, error=None):
        self.answer = answer
        self.error = error
        self.prompts = []

    def generate_forecast(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.answer


class TestRemoteModelForecaster:
    def test_uses_model_answer(self):
        client = FakeClient(
            answer={
                "forecasted_quantity": 41.2,
                "confidence_score": 0.8,
                "reasoning": "Ramadan demand",
                "risk_factors": ["supply shortage"],
            }
        )
        forecast = RemoteModelForecaster(client).forecast(PRODUCT, _history(10, 20, 30))

        assert forecast == Forecast(
            product_id="p-1",
            forecasted_quantity=42,
            confidence_score=0.8,
            reasoning="Ramadan demand",
            risk_factors=("supply shortage",),
        )
        assert "Basmati Rice 5kg" in client.prompts[0]
        assert "RICE-5" in client.prompts[0]
        assert "Current Stock: 40" in client.prompts[0]

    def test_client_error_falls_back(self, caplog):
        client = FakeClient(error=ConnectionError("timeout"))
        forecast = RemoteModelForecaster(client).forecast(PRODUCT, _history(10, 20, 30))

        assert forecast.forecasted_quantity == 23
        assert forecast.confidence_score == 0.5
        assert "timeout" in caplog.text

    def test_malformed_answer_falls_back(self):
        client = FakeClient(answer={"reasoning": "no numbers"})
        forecast = RemoteModelForecaster(client).forecast(PRODUCT, [])
        assert forecast.reasoning == "Insufficient data"

    def test_out_of_range_confidence_falls_back(self):
        client = FakeClient(answer={"forecasted_quantity": 3, "confidence_score": 7})
        assert RemoteModelForecaster(client).forecast(PRODUCT, _history(10, 20, 30)).confidence_score == 0.5


class TestSelection:
    def test_no_client_selects_heuristic(self):
        assert select_forecaster().strategy_name == "heuristic"

    def test_client_selects_remote(self):
        forecaster = select_forecaster(FakeClient(answer={}))
        assert isinstance(forecaster, RemoteModelForecaster)
        assert forecaster.strategy_name == "remote_model"


def test_forecast_rejects_bad_confidence():
    with pytest.raises(ValueError, match="Confidence"):
        Forecast(product_id="p", forecasted_quantity=1, confidence_score=1.5, reasoning="")
