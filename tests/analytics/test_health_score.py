"""
Tests for hisaab.analytics.health — business health score and bands.
"""

from decimal import Decimal

import pytest

from hisaab.analytics import BusinessMetrics, calculate_business_health, get_health_status


class TestHealthScore:
    def test_empty_metrics(self):
        assert calculate_business_health({}) == 80

    def test_healthy_margin(self):
        assert calculate_business_health({"revenue": 100, "gross_profit": 50}) == 95

    def test_none_fields_count_as_zero(self):
        assert calculate_business_health({"revenue": None, "pending_invoices": None}) == 80

    def test_thin_margin_penalized(self):
        assert calculate_business_health({"revenue": 100, "gross_profit": 1}) == 70

    @pytest.mark.parametrize(
        "gross_profit,expected",
        [(41, 95), (21, 90), (11, 85), (6, 80)],
    )
    def test_margin_bands(self, gross_profit, expected):
        assert calculate_business_health({"revenue": 100, "gross_profit": gross_profit}) == expected

    def test_stock_health_bands(self):
        assert calculate_business_health({"total_products": 10, "low_stock_count": 1}) == 70
        assert calculate_business_health({"total_products": 10, "low_stock_count": 4}) == 55

    def test_receivables_over_half_revenue(self):
        metrics = {"revenue": 100, "gross_profit": 50, "accounts_receivable": 60}
        assert calculate_business_health(metrics) == 80

    def test_receivables_ignored_without_revenue(self):
        assert calculate_business_health({"accounts_receivable": 5000}) == 80

    def test_pending_invoices(self):
        assert calculate_business_health({"pending_invoices": 10}) == 80
        assert calculate_business_health({"pending_invoices": 11}) == 75

    def test_high_revenue_bonus_caps_at_100(self):
        metrics = BusinessMetrics(
            revenue=Decimal("2000000"), gross_profit=Decimal("1000000")
        )
        assert calculate_business_health(metrics) == 100

    def test_worst_case(self):
        metrics = {
            "revenue": 100,
            "gross_profit": 0,
            "accounts_receivable": 100,
            "total_products": 10,
            "low_stock_count": 5,
            "pending_invoices": 20,
        }
        assert calculate_business_health(metrics) == 25

    def test_string_amounts_accepted(self):
        assert calculate_business_health({"revenue": "100", "gross_profit": "50"}) == 95

    def test_camel_case_keys_are_mapped(self):
        metrics = {"revenue": 100, "grossProfit": 50, "totalProducts": 0, "lowStockCount": 0}
        assert calculate_business_health(metrics) == 95

    def test_unknown_metric_rejected(self):
        with pytest.raises(ValueError, match="Unknown metric"):
            calculate_business_health({"revenue": 100, "grossMargin": 50})

    def test_same_metric_under_both_spellings_rejected(self):
        with pytest.raises(ValueError, match="more than once"):
            calculate_business_health({"gross_profit": 10, "grossProfit": 20})

    @pytest.mark.parametrize("revenue", ["NaN", "Infinity", float("nan")])
    def test_non_finite_amount_rejected(self, revenue):
        with pytest.raises(ValueError, match="revenue must be numeric"):
            calculate_business_health({"revenue": revenue})

    def test_integral_counts_accepted_in_any_form(self):
        metrics = {"total_products": "10.0", "low_stock_count": 4.0}
        assert calculate_business_health(metrics) == 55

    @pytest.mark.parametrize("count", [10.9, "3.5"])
    def test_fractional_count_rejected(self, count):
        with pytest.raises(ValueError, match="total_products must be a whole number"):
            calculate_business_health({"total_products": count})

    def test_non_numeric_count_rejected(self):
        with pytest.raises(ValueError, match="pending_invoices must be numeric"):
            calculate_business_health({"pending_invoices": "many"})


class TestHealthStatus:
    @pytest.mark.parametrize(
        "score,label",
        [
            (100, "Excellent"),
            (90, "Excellent"),
            (89, "Good"),
            (70, "Good"),
            (69, "Fair"),
            (50, "Fair"),
            (49, "At Risk"),
            (0, "At Risk"),
        ],
    )
    def test_thresholds(self, score, label):
        assert get_health_status(score).label == label

    def test_status_carries_display_fields(self):
        status = get_health_status(95).to_dict()
        assert status["color"] == "text-emerald-600"
        assert status["bg"] == "bg-emerald-50"
        assert status["description"]
