# farmledger/models/forecast_models.py
from typing import Literal

from pydantic import BaseModel

Trend = Literal["Increasing", "Decreasing", "Stable"]
ConfidenceLevel = Literal["High", "Medium", "Low"]


class CategoryTrend(BaseModel):
    slope: float = 0
    intercept: float = 0
    confidence: float = 0
    points: int = 0


class CategoryForecast(BaseModel):
    """90-day outlook for one packaged category."""
    category: str
    predicted: int = 0
    confidence: float = 0
    confidenceLevel: ConfidenceLevel = "Low"
    trend: Trend = "Stable"
    seasonalFactor: float = 1
    slope: float = 0
    intercept: float = 0


class StockRecommendation(BaseModel):
    category: str
    unitsSold: int = 0
    averageDailySales: float = 0
    recommendedStock: int = 0
