# farmledger/store.py

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from farmledger.errors import PersistenceError
from farmledger.models.farmer_models import Farmer
from farmledger.models.inventory_models import (
    DEFAULT_REORDER_LEVEL,
    PackagedInventoryItem,
    RawInventoryItem,
)
from farmledger.models.order_models import Order
from farmledger.models.pricing_models import DEFAULT_CATEGORY_PRICING, CategoryPricing
from farmledger.models.purchase_models import Purchase
from farmledger.mongo_safe import get_col

logger = logging.getLogger(__name__)

FARMERS = "farmers"
PURCHASES = "purchases"
ORDERS = "orders"
INVENTORY_ITEMS = "inventoryItems"
CATEGORY_PRICING = "categoryPricing"
PACKAGED_INVENTORY = "packagedInventory"
PACKAGED_REORDER_LEVELS = "packagedReorderLevels"

ALL_KEYS = (
    FARMERS,
    PURCHASES,
    ORDERS,
    INVENTORY_ITEMS,
    CATEGORY_PRICING,
    PACKAGED_INVENTORY,
    PACKAGED_REORDER_LEVELS,
)


# -------------------------------------------------
# Persistence providers
# -------------------------------------------------
class KeyValueStore:
    """get(key) -> JSON value or None, set(key, value)."""

    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError


class MemoryKeyValueStore(KeyValueStore):
    """
    Keeps values as JSON text, so callers never share references with the
    stored copy (same semantics as a browser-style local storage).
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, str] = {}
        for k, v in (initial or {}).items():
            self.set(k, v)

    def get(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def keys(self) -> List[str]:
        return list(self._data.keys())


class MongoKeyValueStore(KeyValueStore):
    """
    One document per key:
        { _id: "orders", value: [...], updated_at: <utc> }

    Uses get_col() so the app keeps running when Mongo is disabled; reads
    then return None (seeded defaults) and writes raise PersistenceError.
    """

    def __init__(self, collection_name: str = "ledger_state", collection=None):
        self.collection_name = collection_name
        self._collection = collection

    def _col(self):
        if self._collection is not None:
            return self._collection
        return get_col(self.collection_name)

    def get(self, key: str) -> Optional[Any]:
        col = self._col()
        if col is None:
            return None
        doc = col.find_one({"_id": key})
        if not doc:
            return None
        return doc.get("value")

    def set(self, key: str, value: Any) -> None:
        col = self._col()
        if col is None:
            raise PersistenceError("Mongo is disabled/unavailable.", keys=[key])
        col.update_one(
            {"_id": key},
            {"$set": {"value": value, "updated_at": datetime.now(timezone.utc)}},
            upsert=True,
        )


# -------------------------------------------------
# Ledger store
# -------------------------------------------------
class LedgerStore:
    """
    Owns every ledger collection in memory and mirrors them to a
    KeyValueStore. Services get this object injected; nothing else holds
    ledger state.
    """

    def __init__(self, provider: Optional[KeyValueStore] = None):
        self.provider = provider or MemoryKeyValueStore()

        self.farmers: List[Farmer] = []
        self.purchases: List[Purchase] = []
        self.orders: List[Order] = []
        self.inventory_items: List[RawInventoryItem] = []
        self.category_pricing: List[CategoryPricing] = []
        self.packaged_inventory: List[PackagedInventoryItem] = []
        self.packaged_reorder_levels: Dict[str, int] = {}

        self.load()

    # ---------- load / save ----------
    def fetch(self, key: str) -> Optional[Any]:
        """Raw persisted value, bypassing the in-memory copy."""
        return self.provider.get(key)

    def load(self) -> None:
        self.farmers = [Farmer(**d) for d in (self.fetch(FARMERS) or [])]
        self.purchases = [Purchase(**d) for d in (self.fetch(PURCHASES) or [])]
        self.orders = [Order(**d) for d in (self.fetch(ORDERS) or [])]
        self.inventory_items = [RawInventoryItem(**d) for d in (self.fetch(INVENTORY_ITEMS) or [])]

        pricing = self.fetch(CATEGORY_PRICING)
        if pricing is None:
            pricing = DEFAULT_CATEGORY_PRICING
        self.category_pricing = [CategoryPricing(**d) for d in pricing]

        packaged = self.fetch(PACKAGED_INVENTORY)
        if packaged is None:
            packaged = [{"category": c.category, "units": 0, "totalKg": 0} for c in self.category_pricing]
        self.packaged_inventory = [PackagedInventoryItem(**d) for d in packaged]

        levels = self.fetch(PACKAGED_REORDER_LEVELS) or {}
        self.packaged_reorder_levels = {str(k): int(v) for k, v in levels.items()}

        logger.debug(
            "Ledger loaded: %d farmers, %d purchases, %d orders",
            len(self.farmers), len(self.purchases), len(self.orders),
        )

    def serialize(self, key: str) -> Any:
        if key == FARMERS:
            return [f.model_dump() for f in self.farmers]
        if key == PURCHASES:
            return [p.model_dump() for p in self.purchases]
        if key == ORDERS:
            return [o.model_dump() for o in self.orders]
        if key == INVENTORY_ITEMS:
            return [i.model_dump() for i in self.inventory_items]
        if key == CATEGORY_PRICING:
            return [c.model_dump() for c in self.category_pricing]
        if key == PACKAGED_INVENTORY:
            return [p.model_dump() for p in self.packaged_inventory]
        if key == PACKAGED_REORDER_LEVELS:
            return dict(self.packaged_reorder_levels)
        raise KeyError(key)

    def commit(self, *keys: str) -> None:
        """
        Writes every key even if an earlier one fails, then raises one
        PersistenceError naming the keys that did not make it.
        """
        failed: List[str] = []
        messages: List[str] = []
        for key in keys:
            try:
                self.provider.set(key, self.serialize(key))
            except Exception as e:
                logger.error("Failed to persist %s: %s", key, e)
                failed.append(key)
                messages.append(f"{key}: {e}")

        if failed:
            raise PersistenceError(
                f"Changes applied but not saved: {', '.join(failed)}",
                messages,
                keys=failed,
            )

    def reset(self) -> None:
        """Clear all data and re-seed the default categories."""
        self.farmers = []
        self.purchases = []
        self.orders = []
        self.inventory_items = []
        self.category_pricing = [CategoryPricing(**d) for d in DEFAULT_CATEGORY_PRICING]
        self.packaged_inventory = [
            PackagedInventoryItem(category=c.category) for c in self.category_pricing
        ]
        self.packaged_reorder_levels = {
            c.category: DEFAULT_REORDER_LEVEL for c in self.category_pricing
        }
        self.commit(*ALL_KEYS)

    # ---------- lookups ----------
    def find_farmer(self, farmer_id: str) -> Optional[Farmer]:
        return next((f for f in self.farmers if f.farmerId == farmer_id), None)

    def find_purchase(self, purchase_id: str) -> Optional[Purchase]:
        return next((p for p in self.purchases if p.purchaseId == purchase_id), None)

    def find_order(self, order_id: str) -> Optional[Order]:
        return next((o for o in self.orders if o.orderId == order_id), None)

    def find_category(self, category: str) -> Optional[CategoryPricing]:
        return next((c for c in self.category_pricing if c.category == category), None)

    def find_raw_item(self, category: str) -> Optional[RawInventoryItem]:
        return next((i for i in self.inventory_items if i.category == category), None)

    def find_raw_item_by_id(self, item_id: str) -> Optional[RawInventoryItem]:
        return next((i for i in self.inventory_items if i.itemId == item_id), None)

    def find_packaged(self, category: str) -> Optional[PackagedInventoryItem]:
        return next((p for p in self.packaged_inventory if p.category == category), None)
