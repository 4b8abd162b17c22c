# farmledger/services/forecast_service.py

import math
from collections import defaultdict
from datetime import timedelta
from typing import Dict, List, Sequence

import numpy as np

from farmledger.errors import NotFoundError
from farmledger.models.forecast_models import CategoryForecast, CategoryTrend, StockRecommendation
from farmledger.models.order_models import Order
from farmledger.services.base import LedgerService
from farmledger.services.form_utils import parse_date

TREND_WINDOW_DAYS = 90
FORECAST_HORIZON_DAYS = 90
AVERAGE_WINDOW_DAYS = 30
RESTOCK_HORIZON_DAYS = 60


# polyfit leaves float noise on a flat series
SLOPE_EPSILON = 1e-9


def linear_trend(quantities: Sequence[float]) -> CategoryTrend:
    """
    Least squares fit of quantity against order index (0..n-1).
    Fewer than two points gives a flat, zero-confidence trend.
    """
    n = len(quantities)
    if n < 2:
        return CategoryTrend(points=n)

    x = np.arange(n, dtype=float)
    y = np.asarray(quantities, dtype=float)
    slope, intercept = np.polyfit(x, y, 1)
    if abs(slope) < SLOPE_EPSILON:
        slope, intercept = 0.0, float(y.mean())

    return CategoryTrend(
        slope=float(slope),
        intercept=float(intercept),
        confidence=r_squared(y, slope, intercept),
        points=n,
    )


def r_squared(quantities: Sequence[float], slope: float, intercept: float) -> float:
    y = np.asarray(quantities, dtype=float)
    x = np.arange(len(y), dtype=float)
    ss_total = float(np.sum((y - y.mean()) ** 2))
    if ss_total == 0:
        return 0.0
    ss_residual = float(np.sum((y - (slope * x + intercept)) ** 2))
    return 1 - ss_residual / ss_total


def seasonal_factors(orders: Sequence[Order]) -> Dict[int, float]:
    """Mean quantity per order for each calendar month (1-12)."""
    totals: Dict[int, List[float]] = defaultdict(lambda: [0.0, 0])
    for o in orders:
        d = parse_date(o.date)
        if d is None:
            continue
        totals[d.month][0] += o.quantity
        totals[d.month][1] += 1
    return {month: qty / count for month, (qty, count) in totals.items()}


def confidence_level(confidence: float) -> str:
    if confidence > 0.7:
        return "High"
    if confidence > 0.4:
        return "Medium"
    return "Low"


def trend_label(slope: float) -> str:
    if slope > 0:
        return "Increasing"
    if slope < 0:
        return "Decreasing"
    return "Stable"


class ForecastService(LedgerService):
    """
    Two forecasts over order history:
      - forecast(): linear trend over the last 90 days, scaled by a monthly seasonal factor
      - forecast_demand(): 30-day average turned into a 60-day restock figure
    """

    def _recent_orders(self, days: int) -> List[Order]:
        since = self.today() - timedelta(days=days)
        out = []
        for o in self.store.orders:
            d = parse_date(o.date)
            if d and d >= since:
                out.append(o)
        return out

    def forecast(self, category: str) -> CategoryForecast:
        if not self.store.find_category(category):
            raise NotFoundError(f'Category "{category}" not found.')
        return self._forecast(category, self._recent_orders(TREND_WINDOW_DAYS), seasonal_factors(self.store.orders))

    def forecast_all(self) -> Dict[str, CategoryForecast]:
        recent = self._recent_orders(TREND_WINDOW_DAYS)
        factors = seasonal_factors(self.store.orders)
        return {
            c.category: self._forecast(c.category, recent, factors)
            for c in self.store.category_pricing
        }

    def _forecast(self, category: str, recent: List[Order], factors: Dict[int, float]) -> CategoryForecast:
        quantities = [o.quantity for o in recent if o.category == category]
        trend = linear_trend(quantities)

        # factor comes from all categories for the current month
        factor = factors.get(self.today().month) or 1
        baseline = trend.intercept + trend.slope * FORECAST_HORIZON_DAYS
        # half-up rounding
        predicted = max(0, math.floor(baseline * factor + 0.5))

        return CategoryForecast(
            category=category,
            predicted=predicted,
            confidence=trend.confidence,
            confidenceLevel=confidence_level(trend.confidence),
            trend=trend_label(trend.slope),
            seasonalFactor=factor,
            slope=trend.slope,
            intercept=trend.intercept,
        )

    def forecast_demand(self) -> List[StockRecommendation]:
        today = self.today()
        since = today - timedelta(days=AVERAGE_WINDOW_DAYS)

        sold: Dict[str, int] = {}
        for o in self.store.orders:
            d = parse_date(o.date)
            if d and since <= d <= today:
                sold[o.category] = sold.get(o.category, 0) + o.quantity

        out = []
        for category, units in sold.items():
            avg = units / AVERAGE_WINDOW_DAYS
            out.append(StockRecommendation(
                category=category,
                unitsSold=units,
                averageDailySales=avg,
                recommendedStock=math.ceil(avg * RESTOCK_HORIZON_DAYS),
            ))
        return out
