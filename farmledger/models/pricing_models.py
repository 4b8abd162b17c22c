# farmledger/models/pricing_models.py
from typing import List

from pydantic import BaseModel, Field

VARIES = "Varies"


class CategoryPricing(BaseModel):
    category: str = Field(..., min_length=1)
    weightInfo: str          # "<N> kg" or "Varies"
    price: float = Field(0, ge=0)


DEFAULT_CATEGORY_PRICING: List[dict] = [
    {"category": "Small (100g)", "weightInfo": "0.1 kg", "price": 5},
    {"category": "Medium (250g)", "weightInfo": "0.25 kg", "price": 10},
    {"category": "Large (500g)", "weightInfo": "0.5 kg", "price": 18},
    {"category": "Extra Large (1kg)", "weightInfo": "1.0 kg", "price": 30},
    {"category": "Family Pack (2kg)", "weightInfo": "2.0 kg", "price": 55},
    {"category": "Bulk Pack (5kg)", "weightInfo": "5.0 kg", "price": 120},
    {"category": "Premium (custom)", "weightInfo": VARIES, "price": 0},
]
