# farmledger/models/dashboard_models.py

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List


@dataclass
class Alert:
    type: str
    severity: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class DashboardStats:
    total_revenue: float = 0.0
    active_orders: int = 0
    low_stock_items: int = 0
    suppliers: int = 0
    refresh_seconds: int = 30

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalRevenue": round(self.total_revenue, 2),
            "activeOrders": self.active_orders,
            "lowStockItems": self.low_stock_items,
            "suppliers": self.suppliers,
            "refreshSeconds": self.refresh_seconds,
        }


@dataclass
class ChartSeries:
    label: str
    labels: List[str] = field(default_factory=list)
    data: List[float] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ActivityItem:
    order_id: str
    customer_name: str
    category: str
    quantity: int
    date: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "orderId": self.order_id,
            "customerName": self.customer_name,
            "category": self.category,
            "quantity": self.quantity,
            "date": self.date,
            "summary": f"Ordered {self.quantity} units of {self.category}",
        }
