# farmledger/services/dashboard_service.py

import logging
from typing import Any, Dict, List

from farmledger.models.dashboard_models import ActivityItem, ChartSeries, DashboardStats
from farmledger.services.base import LedgerService
from farmledger.store import FARMERS, INVENTORY_ITEMS, ORDERS

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_SECONDS = 30
RECENT_ACTIVITY_LIMIT = 5


# -----------------------------
# Small helpers for persisted rows
# -----------------------------
def _num(d: Dict[str, Any], key: str) -> float:
    try:
        return float(d.get(key) or 0)
    except (TypeError, ValueError):
        return 0.0


class DashboardService(LedgerService):
    """
    Summary tiles, chart series and recent activity.
    stats() reads the persisted copy so it reflects what was actually saved.
    """

    def __init__(self, store, hub=None, today=None, refresh_seconds: int = DEFAULT_REFRESH_SECONDS):
        super().__init__(store, hub, today)
        self.refresh_seconds = refresh_seconds

    # =========================================================
    # STATS
    # =========================================================
    def stats(self) -> DashboardStats:
        orders: List[Dict[str, Any]] = self.store.fetch(ORDERS) or []
        farmers: List[Dict[str, Any]] = self.store.fetch(FARMERS) or []
        items: List[Dict[str, Any]] = self.store.fetch(INVENTORY_ITEMS) or []

        return DashboardStats(
            total_revenue=sum(_num(o, "totalPrice") for o in orders),
            active_orders=sum(1 for o in orders if o.get("status") == "Pending"),
            low_stock_items=sum(1 for i in items if _num(i, "quantity") < _num(i, "reorderLevel")),
            suppliers=len(farmers),
            refresh_seconds=self.refresh_seconds,
        )

    # =========================================================
    # CHARTS
    # =========================================================
    def charts(self) -> Dict[str, ChartSeries]:
        packaged = ChartSeries(label="Units Sold")
        for cat in self.store.category_pricing:
            item = self.store.find_packaged(cat.category)
            packaged.labels.append(cat.category)
            packaged.data.append(item.units if item else 0)

        raw = ChartSeries(
            label="Current Stock (kg)",
            labels=[i.category for i in self.store.inventory_items],
            data=[i.quantity for i in self.store.inventory_items],
        )
        return {"sales": packaged, "inventory": raw}

    # =========================================================
    # ACTIVITY
    # =========================================================
    def recent_activity(self, limit: int = RECENT_ACTIVITY_LIMIT) -> List[ActivityItem]:
        recent = self.store.orders[-limit:] if limit > 0 else []
        return [
            ActivityItem(
                order_id=o.orderId,
                customer_name=o.customerName,
                category=o.category,
                quantity=o.quantity,
                date=o.date,
            )
            for o in reversed(recent)
        ]

    def reset(self) -> None:
        logger.warning("Resetting all ledger data")
        self.store.reset()
