# farmledger/services/alert_service.py

from typing import List

from farmledger.models.dashboard_models import Alert
from farmledger.services.base import LedgerService
from farmledger.services.order_service import OrderService
from farmledger.services.packaged_inventory_service import PackagedInventoryService
from farmledger.services.raw_inventory_service import RawInventoryService

DEFAULT_REVENUE_THRESHOLD = 10000


def _qty_label(q) -> str:
    n = float(q)
    return f"{n:g}"


class AlertService(LedgerService):

    def __init__(self, store, hub=None, today=None, raw=None, packaged=None, orders=None,
                 revenue_threshold: float = DEFAULT_REVENUE_THRESHOLD):
        super().__init__(store, hub, today)
        self.raw = raw or RawInventoryService(store, hub, today)
        self.packaged = packaged or PackagedInventoryService(store, hub, today)
        self.orders = orders or OrderService(store, hub, today, packaged=self.packaged)
        self.revenue_threshold = revenue_threshold

    def evaluate(self) -> List[Alert]:
        alerts: List[Alert] = []

        for item in self.raw.low_stock_items():
            alerts.append(Alert(
                type="inventory",
                severity="high",
                message=f"Low stock alert: {item.category} ({_qty_label(item.quantity)} units remaining)",
            ))

        for item, level in self.packaged.low_stock_items():
            alerts.append(Alert(
                type="packaged",
                severity="high",
                message=f"{item.category} is below {level} units!",
            ))

        if self.orders.current_month_revenue() < self.revenue_threshold:
            alerts.append(Alert(
                type="financial",
                severity="medium",
                message="Revenue below expected threshold for current period",
            ))

        return alerts
