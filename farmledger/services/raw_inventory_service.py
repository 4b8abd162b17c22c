# farmledger/services/raw_inventory_service.py

import logging
import random
import string
from typing import Any, Dict, Iterable, List, Optional

from farmledger.errors import (
    DuplicateKeyError,
    FieldErrors,
    InsufficientStockError,
    NotFoundError,
    ValidationError,
)
from farmledger.events import ModuleEvents
from farmledger.models.inventory_models import (
    DEFAULT_REORDER_LEVEL,
    DEFAULT_STORAGE_LOCATION,
    RawInventoryItem,
)
from farmledger.services.base import LedgerService
from farmledger.services.form_utils import (
    ALNUM_RE,
    LETTERS_SPACES_RE,
    clean,
    parse_date,
    to_float,
)
from farmledger.store import INVENTORY_ITEMS

logger = logging.getLogger(__name__)


class RawInventoryService(LedgerService):
    """
    Raw stock in kg, keyed by category (the purchasing farmer's region).
    itemId is the stored key, category is the key every ledger operation uses.
    """

    # =========================
    # ID GENERATOR
    # =========================
    @staticmethod
    def generate_item_id() -> str:
        # RAW + 9 uppercase alphanumerics
        suffix = "".join(random.choices(string.ascii_uppercase + string.digits, k=9))
        return f"RAW{suffix}"

    # =========================
    # READ
    # =========================
    def list_items(self) -> List[RawInventoryItem]:
        return list(self.store.inventory_items)

    def get_item(self, category: str) -> Optional[RawInventoryItem]:
        return self.store.find_raw_item(category)

    def quantity(self, category: str) -> float:
        item = self.store.find_raw_item(category)
        return item.quantity if item else 0.0

    @staticmethod
    def is_low_stock(item: RawInventoryItem) -> bool:
        return item.quantity < item.reorderLevel

    def low_stock_items(self) -> List[RawInventoryItem]:
        return [i for i in self.store.inventory_items if self.is_low_stock(i)]

    # =========================
    # LEDGER OPERATIONS
    # =========================
    def _new_item(self, category: str, quantity: float = 0.0) -> RawInventoryItem:
        item = RawInventoryItem(
            itemId=self.generate_item_id(),
            category=category,
            quantity=quantity,
            reorderLevel=DEFAULT_REORDER_LEVEL,
            restockDate="",
            storageLocation=DEFAULT_STORAGE_LOCATION,
        )
        self.store.inventory_items.append(item)
        return item

    def credit(self, category: str, quantity_kg: Any, commit: bool = True) -> RawInventoryItem:
        qty = to_float(quantity_kg)
        if qty is None or qty <= 0:
            raise ValidationError("Quantity must be a positive number.")

        item = self.store.find_raw_item(category)
        if item is None:
            item = self._new_item(category, qty)
        else:
            item.quantity += qty

        logger.debug("Raw credit %s +%.3f kg -> %.3f kg", category, qty, item.quantity)
        if commit:
            self._commit(ModuleEvents.INVENTORY, {"category": category, "quantity": qty}, INVENTORY_ITEMS)
        return item

    def debit(self, category: str, quantity_kg: float, commit: bool = True) -> RawInventoryItem:
        item = self.store.find_raw_item(category)
        available = item.quantity if item else 0
        if item is None or available < quantity_kg:
            raise InsufficientStockError(
                f"Insufficient raw inventory for {category}. Available: {available}kg"
            )

        item.quantity -= quantity_kg
        if commit:
            self._commit(ModuleEvents.INVENTORY, {"category": category, "quantity": -quantity_kg}, INVENTORY_ITEMS)
        return item

    def adjust(self, category: str, delta: float, commit: bool = True) -> Optional[RawInventoryItem]:
        """Apply a signed delta, never going below zero."""
        item = self.store.find_raw_item(category)
        if item is None:
            if delta <= 0:
                return None
            item = self._new_item(category, delta)
        else:
            item.quantity = max(0.0, item.quantity + delta)

        if commit:
            self._commit(ModuleEvents.INVENTORY, {"category": category, "delta": delta}, INVENTORY_ITEMS)
        return item

    def ensure_categories(self, categories: Iterable[str], commit: bool = True) -> List[RawInventoryItem]:
        """One zero-quantity item for every category that has none yet."""
        created = []
        for category in dict.fromkeys(c for c in categories if c):
            if not self.store.find_raw_item(category):
                created.append(self._new_item(category))
        if created and commit:
            self._commit(None, None, INVENTORY_ITEMS)
        return created

    # =========================
    # INVENTORY ITEM FORM
    # =========================
    def _validate_item_form(self, form: Dict[str, Any], errs: FieldErrors, existing: Optional[RawInventoryItem]) -> Dict[str, Any]:
        category = clean(form.get("category"))
        quantity = to_float(form.get("quantity"))
        reorder_level = to_float(form.get("reorderLevel"))
        restock_raw = clean(form.get("restockDate"))
        storage_location = clean(form.get("storageLocation"))

        if not category:
            errs.add("Category is required.")
        elif not LETTERS_SPACES_RE.match(category):
            errs.add("Category must contain only letters and spaces.")
        else:
            other = self.store.find_raw_item(category)
            if other is not None and other is not existing:
                errs.add(f"An inventory item for category '{category}' already exists.", DuplicateKeyError)

        # quantity is only taken on create; updates keep the ledger quantity
        if existing is None:
            if quantity is None:
                errs.add("Quantity must be a number.")
            elif quantity < 0:
                errs.add("Quantity cannot be negative.")

        if reorder_level is None:
            errs.add("Reorder Level must be a number.")
        elif reorder_level < 0:
            errs.add("Reorder Level cannot be negative.")

        if restock_raw:
            restock = parse_date(restock_raw)
            if restock is None:
                errs.add("Restock Date must be a valid date (YYYY-MM-DD).")
            elif restock < self.today():
                errs.add("Restock Date cannot be in the past.")

        if not storage_location:
            errs.add("Storage Location is required.")
        elif len(storage_location) < 3:
            errs.add("Storage Location must be at least 3 characters long.")

        return {
            "category": category,
            "quantity": quantity,
            "reorderLevel": reorder_level,
            "restockDate": restock_raw,
            "storageLocation": storage_location,
        }

    def add_item(self, form: Dict[str, Any]) -> RawInventoryItem:
        item_id = clean(form.get("itemId"))

        errs = FieldErrors()
        if not item_id:
            errs.add("Item ID is required.")
        elif not ALNUM_RE.match(item_id):
            errs.add("Item ID must be alphanumeric.")
        elif self.store.find_raw_item_by_id(item_id):
            errs.add("Item ID must be unique.", DuplicateKeyError)

        values = self._validate_item_form(form, errs, existing=None)
        errs.raise_if_any()

        item = RawInventoryItem(itemId=item_id, **values)
        self.store.inventory_items.append(item)
        logger.info("New inventory item %s added for %s", item_id, item.category)

        self._commit(ModuleEvents.INVENTORY, {"itemId": item_id}, INVENTORY_ITEMS)
        return item

    def update_item(self, item_id: str, form: Dict[str, Any]) -> RawInventoryItem:
        item = self.store.find_raw_item_by_id(item_id)
        if not item:
            raise NotFoundError(f"Inventory item {item_id} not found.")

        errs = FieldErrors()
        values = self._validate_item_form(form, errs, existing=item)
        errs.raise_if_any()

        item.category = values["category"]
        item.reorderLevel = values["reorderLevel"]
        item.restockDate = values["restockDate"]
        item.storageLocation = values["storageLocation"]

        self._commit(ModuleEvents.INVENTORY, {"itemId": item_id}, INVENTORY_ITEMS)
        return item

    def remove_item(self, item_id: str) -> None:
        if not self.store.find_raw_item_by_id(item_id):
            raise NotFoundError(f"Inventory item {item_id} not found.")
        self.store.inventory_items = [i for i in self.store.inventory_items if i.itemId != item_id]
        self._commit(ModuleEvents.INVENTORY, {"itemId": item_id, "deleted": True}, INVENTORY_ITEMS)
