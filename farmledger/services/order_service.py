# farmledger/services/order_service.py

import logging
from collections import defaultdict
from datetime import date
from typing import Any, Dict, List, Optional

from farmledger.errors import (
    DuplicateKeyError,
    FieldErrors,
    InsufficientStockError,
    NotFoundError,
    ValidationError,
)
from farmledger.events import ModuleEvents
from farmledger.models.finance_models import RevenueSummary
from farmledger.models.order_models import ORDER_STATUSES, Order
from farmledger.services.base import LedgerService
from farmledger.services.form_utils import (
    ALNUM_RE,
    LETTERS_SPACES_RE,
    PHONE_RE,
    clean,
    parse_date,
    to_int,
)
from farmledger.services.packaged_inventory_service import PackagedInventoryService
from farmledger.store import ORDERS, PACKAGED_INVENTORY

logger = logging.getLogger(__name__)


class OrderService(LedgerService):
    """Sales of packaged units. Placing an order takes units out of packaged inventory."""

    def __init__(self, store, hub=None, today=None, packaged=None):
        super().__init__(store, hub, today)
        self.packaged = packaged or PackagedInventoryService(store, hub, today)

    # =========================
    # READ
    # =========================
    def list_orders(self, status: Optional[str] = None) -> List[Order]:
        if status:
            return [o for o in self.store.orders if o.status == status]
        return list(self.store.orders)

    def get_order(self, order_id: str) -> Order:
        o = self.store.find_order(order_id)
        if not o:
            raise NotFoundError(f"Order '{order_id}' not found.")
        return o

    def revenue_summary(self) -> RevenueSummary:
        by_category: Dict[str, float] = defaultdict(float)
        for o in self.store.orders:
            by_category[o.category] += o.totalPrice
        return RevenueSummary(totalRevenue=sum(by_category.values()), byCategory=dict(by_category))

    def current_month_revenue(self, today: Optional[date] = None) -> float:
        today = today or self.today()
        total = 0.0
        for o in self.store.orders:
            d = parse_date(o.date)
            if d and d.year == today.year and d.month == today.month:
                total += o.totalPrice
        return total

    # =========================
    # CREATE
    # =========================
    def place(self, form: Dict[str, Any]) -> Order:
        order_id = clean(form.get("orderId"))
        customer_name = clean(form.get("customerName"))
        customer_contact = clean(form.get("customerContact"))
        category = clean(form.get("category"))
        quantity = to_int(form.get("quantity"))
        date_raw = clean(form.get("date"))

        errs = FieldErrors()

        if not order_id:
            errs.add("Order ID is required.")
        elif not ALNUM_RE.match(order_id):
            errs.add("Order ID must be alphanumeric.")
        elif self.store.find_order(order_id):
            errs.add("Order ID must be unique.", DuplicateKeyError)

        if not customer_name:
            errs.add("Customer Name is required.")
        elif not LETTERS_SPACES_RE.match(customer_name):
            errs.add("Customer Name must contain only letters and spaces.")

        if not customer_contact:
            errs.add("Customer Contact is required.")
        elif not PHONE_RE.match(customer_contact):
            errs.add("Customer Contact must be a valid phone number.")

        cat = None
        if not category:
            errs.add("Product Category is required.")
        else:
            cat = self.store.find_category(category)
            if not cat:
                errs.add("Selected Product Category does not exist.", NotFoundError)

        if quantity is None:
            errs.add("Quantity must be a whole number.")
        elif quantity <= 0:
            errs.add("Quantity must be greater than zero.")
        elif cat is not None:
            available = self.packaged.available_units(category)
            if available < quantity:
                errs.add(
                    f'Insufficient packaged inventory for category "{category}". '
                    f"Available units: {available}.",
                    InsufficientStockError,
                )

        if not date_raw:
            errs.add("Order Date is required.")
        else:
            d = parse_date(date_raw)
            if d is None:
                errs.add("Order Date must be a valid date (YYYY-MM-DD).")
            elif d > self.today():
                errs.add("Order Date cannot be in the future.")

        errs.raise_if_any()

        order = Order(
            orderId=order_id,
            customerName=customer_name,
            customerContact=customer_contact,
            category=category,
            quantity=quantity,
            totalPrice=cat.price * quantity,
            status="Pending",
            date=date_raw,
        )

        self.packaged.debit(category, quantity, commit=False)
        self.store.orders.append(order)
        logger.info("Order %s: %d x %s = %.2f", order_id, quantity, category, order.totalPrice)

        self._commit(
            ModuleEvents.SALE,
            {"orderId": order_id, "category": category, "quantity": quantity},
            ORDERS, PACKAGED_INVENTORY,
        )
        return order

    # =========================
    # UPDATE / DELETE
    # =========================
    def update_status(self, order_id: str, status: Any) -> Order:
        order = self.get_order(order_id)
        status = clean(status)
        if status not in ORDER_STATUSES:
            raise ValidationError(f"Status must be one of: {', '.join(ORDER_STATUSES)}.")

        order.status = status
        self._commit(ModuleEvents.FINANCIAL, {"orderId": order_id, "status": status}, ORDERS)
        return order

    def remove(self, order_id: str) -> None:
        # packaged units are not returned to stock
        self.get_order(order_id)
        self.store.orders = [o for o in self.store.orders if o.orderId != order_id]
        self._commit(ModuleEvents.FINANCIAL, {"orderId": order_id, "deleted": True}, ORDERS)
