# farmledger/models/purchase_models.py
from pydantic import BaseModel, Field


class Purchase(BaseModel):
    purchaseId: str = Field(..., min_length=1)
    farmerId: str
    date: str                      # YYYY-MM-DD
    quantity: float = Field(..., gt=0)      # kg
    pricePerKg: float = Field(..., gt=0)
    totalCost: float = 0
