# farmledger/ledger.py

import logging
from datetime import date
from typing import Callable, Optional

from farmledger.errors import PersistenceError
from farmledger.events import EventHub
from farmledger.services.alert_service import DEFAULT_REVENUE_THRESHOLD, AlertService
from farmledger.services.dashboard_service import DEFAULT_REFRESH_SECONDS, DashboardService
from farmledger.services.export_service import ExportService
from farmledger.services.farmer_service import FarmerService
from farmledger.services.finance_service import FinanceService
from farmledger.services.forecast_service import ForecastService
from farmledger.services.order_service import OrderService
from farmledger.services.packaged_inventory_service import PackagedInventoryService
from farmledger.services.packaging_service import PackagingService
from farmledger.services.pricing_service import PricingService
from farmledger.services.purchase_service import PurchaseService
from farmledger.services.raw_inventory_service import RawInventoryService
from farmledger.services.report_service import ReportService
from farmledger.store import INVENTORY_ITEMS, KeyValueStore, LedgerStore

logger = logging.getLogger(__name__)


class FarmLedger:
    """
    One store, one event hub and every service sharing them.

        ledger = FarmLedger(MemoryKeyValueStore())
        ledger.initialize()
        ledger.purchases.record({...})
    """

    def __init__(
        self,
        provider: Optional[KeyValueStore] = None,
        today: Optional[Callable[[], date]] = None,
        revenue_threshold: float = DEFAULT_REVENUE_THRESHOLD,
        refresh_seconds: int = DEFAULT_REFRESH_SECONDS,
    ):
        self.store = LedgerStore(provider)
        self.hub = EventHub()
        args = (self.store, self.hub, today)

        self.raw = RawInventoryService(*args)
        self.packaged = PackagedInventoryService(*args)
        self.pricing = PricingService(*args, packaged=self.packaged)
        self.packaging = PackagingService(*args, raw=self.raw, packaged=self.packaged)
        self.farmers = FarmerService(*args, raw=self.raw)
        self.purchases = PurchaseService(*args, raw=self.raw)
        self.orders = OrderService(*args, packaged=self.packaged)
        self.finance = FinanceService(*args)
        self.forecast = ForecastService(*args)
        self.reports = ReportService(*args)
        self.alerts = AlertService(
            *args,
            raw=self.raw,
            packaged=self.packaged,
            orders=self.orders,
            revenue_threshold=revenue_threshold,
        )
        self.dashboard = DashboardService(*args, refresh_seconds=refresh_seconds)
        self.exports = ExportService(self.store, reports=self.reports)

        self.hub.register("alerts", self.alerts.evaluate)
        self.hub.register("revenue", self.orders.revenue_summary)
        self.hub.register("forecast", self.forecast.forecast_all)
        self.hub.register("financial", self.finance.analyze)
        self.hub.register("report", self.reports.refresh)

    def initialize(self) -> None:
        """
        Startup pass: every farmer region gets a raw item, packaged
        categories follow the catalog, then all derived views are computed.
        """
        regions = [f.region for f in self.store.farmers]
        keys = self.packaged.align(commit=False)
        if self.raw.ensure_categories(regions, commit=False):
            keys.append(INVENTORY_ITEMS)

        try:
            self.store.commit(*keys)
        except PersistenceError as e:
            logger.warning("Startup alignment not saved: %s", e.keys)
        self.hub.refresh()

    def reset(self) -> None:
        """Clear every ledger, re-seed the catalog and recompute."""
        try:
            self.dashboard.reset()
        finally:
            self.hub.refresh()
