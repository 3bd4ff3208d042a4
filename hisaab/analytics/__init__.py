"""
Hisaab Analytics — business health scoring and demand forecasting.
"""

from hisaab.analytics.forecasting import (
    Forecast,
    Forecaster,
    ForecastModelClient,
    HeuristicForecaster,
    Product,
    RemoteModelForecaster,
    SalesRecord,
    select_forecaster,
)
from hisaab.analytics.health import (
    BusinessMetrics,
    HealthStatus,
    calculate_business_health,
    get_health_status,
)

__all__ = [
    "BusinessMetrics",
    "Forecast",
    "ForecastModelClient",
    "Forecaster",
    "HealthStatus",
    "HeuristicForecaster",
    "Product",
    "RemoteModelForecaster",
    "SalesRecord",
    "calculate_business_health",
    "get_health_status",
    "select_forecaster",
]
