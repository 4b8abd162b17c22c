# farmledger/services/purchase_service.py

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from farmledger.errors import DuplicateKeyError, FieldErrors, NotFoundError
from farmledger.events import ModuleEvents
from farmledger.models.purchase_models import Purchase
from farmledger.services.base import LedgerService
from farmledger.services.form_utils import ALNUM_RE, clean, in_range, parse_date, to_float
from farmledger.services.raw_inventory_service import RawInventoryService
from farmledger.store import INVENTORY_ITEMS, PURCHASES

logger = logging.getLogger(__name__)


class PurchaseService(LedgerService):
    """
    Raw stock bought from farmers. Every create/edit/delete moves the
    raw inventory of the farmer's region by the same quantity.
    """

    def __init__(self, store, hub=None, today=None, raw=None):
        super().__init__(store, hub, today)
        self.raw = raw or RawInventoryService(store, hub, today)

    # =========================
    # READ
    # =========================
    def list_purchases(self) -> List[Purchase]:
        return list(self.store.purchases)

    def get_purchase(self, purchase_id: str) -> Purchase:
        p = self.store.find_purchase(purchase_id)
        if not p:
            raise NotFoundError(f"Purchase '{purchase_id}' not found.")
        return p

    def expenses_for_period(self, start: Any = None, end: Any = None) -> float:
        start_d, end_d = parse_date(start), parse_date(end)
        return sum(
            p.totalCost for p in self.store.purchases
            if in_range(parse_date(p.date), start_d, end_d)
        )

    # =========================
    # VALIDATION
    # =========================
    def _validate_fields(self, form: Dict[str, Any], errs: FieldErrors) -> Dict[str, Any]:
        farmer_id = clean(form.get("farmerId"))
        date_raw = clean(form.get("date"))
        quantity = to_float(form.get("quantity"))
        price = to_float(form.get("pricePerKg"))

        if not farmer_id:
            errs.add("Farmer ID is required.")
        elif not self.store.find_farmer(farmer_id):
            errs.add("Farmer ID does not exist.", NotFoundError)

        if not date_raw:
            errs.add("Date is required.")
        else:
            d: Optional[date] = parse_date(date_raw)
            if d is None:
                errs.add("Date must be a valid date (YYYY-MM-DD).")
            elif d > self.today():
                errs.add("Date cannot be in the future.")

        if quantity is None:
            errs.add("Quantity must be a number.")
        elif quantity <= 0:
            errs.add("Quantity must be greater than zero.")

        if price is None:
            errs.add("Price per Kg must be a number.")
        elif price <= 0:
            errs.add("Price per Kg must be greater than zero.")

        return {"farmerId": farmer_id, "date": date_raw, "quantity": quantity, "pricePerKg": price}

    # =========================
    # CREATE
    # =========================
    def record(self, form: Dict[str, Any]) -> Purchase:
        purchase_id = clean(form.get("purchaseId"))

        errs = FieldErrors()
        if not purchase_id:
            errs.add("Purchase ID is required.")
        elif not ALNUM_RE.match(purchase_id):
            errs.add("Purchase ID must be alphanumeric.")
        elif self.store.find_purchase(purchase_id):
            errs.add("Purchase ID must be unique.", DuplicateKeyError)

        values = self._validate_fields(form, errs)
        errs.raise_if_any()

        purchase = Purchase(
            purchaseId=purchase_id,
            totalCost=values["quantity"] * values["pricePerKg"],
            **values,
        )
        farmer = self.store.find_farmer(purchase.farmerId)

        self.store.purchases.append(purchase)
        self.raw.credit(farmer.region, purchase.quantity, commit=False)
        logger.info("Purchase %s: %.2f kg from %s (%s)", purchase_id, purchase.quantity, farmer.farmerId, farmer.region)

        self._commit(
            ModuleEvents.PURCHASE,
            {"purchaseId": purchase_id, "category": farmer.region, "quantity": purchase.quantity},
            PURCHASES, INVENTORY_ITEMS,
        )
        return purchase

    # =========================
    # UPDATE
    # =========================
    def update(self, purchase_id: str, form: Dict[str, Any]) -> Purchase:
        purchase = self.get_purchase(purchase_id)

        old_farmer = self.store.find_farmer(purchase.farmerId)
        if not old_farmer:
            raise NotFoundError(f"Farmer '{purchase.farmerId}' of purchase '{purchase_id}' no longer exists.")

        merged = {**purchase.model_dump(), **{k: v for k, v in form.items() if v is not None}}
        errs = FieldErrors()
        values = self._validate_fields(merged, errs)
        errs.raise_if_any()

        new_farmer = self.store.find_farmer(values["farmerId"])
        old_qty, new_qty = purchase.quantity, values["quantity"]

        if old_farmer.region == new_farmer.region:
            self.raw.adjust(new_farmer.region, new_qty - old_qty, commit=False)
        else:
            self.raw.adjust(old_farmer.region, -old_qty, commit=False)
            self.raw.adjust(new_farmer.region, new_qty, commit=False)

        purchase.farmerId = values["farmerId"]
        purchase.date = values["date"]
        purchase.quantity = new_qty
        purchase.pricePerKg = values["pricePerKg"]
        purchase.totalCost = new_qty * values["pricePerKg"]

        self._commit(
            ModuleEvents.PURCHASE,
            {"purchaseId": purchase_id, "category": new_farmer.region, "quantity": new_qty - old_qty},
            PURCHASES, INVENTORY_ITEMS,
        )
        return purchase

    # =========================
    # DELETE
    # =========================
    def remove(self, purchase_id: str) -> None:
        purchase = self.get_purchase(purchase_id)

        farmer = self.store.find_farmer(purchase.farmerId)
        if farmer:
            self.raw.adjust(farmer.region, -purchase.quantity, commit=False)
        else:
            logger.warning("Purchase %s deleted without inventory reversal: farmer %s is gone", purchase_id, purchase.farmerId)

        self.store.purchases = [p for p in self.store.purchases if p.purchaseId != purchase_id]
        self._commit(
            ModuleEvents.PURCHASE,
            {"purchaseId": purchase_id, "quantity": -purchase.quantity},
            PURCHASES, INVENTORY_ITEMS,
        )
