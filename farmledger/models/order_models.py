# farmledger/models/order_models.py
from typing import Literal, Tuple

from pydantic import BaseModel, Field

ORDER_STATUSES: Tuple[str, ...] = ("Pending", "Processed", "Shipped", "Delivered")

OrderStatus = Literal["Pending", "Processed", "Shipped", "Delivered"]


class Order(BaseModel):
    orderId: str = Field(..., min_length=1)
    customerName: str
    customerContact: str
    category: str
    quantity: int = Field(..., gt=0)   # packaged units
    totalPrice: float = 0
    status: OrderStatus = "Pending"
    date: str                          # YYYY-MM-DD
