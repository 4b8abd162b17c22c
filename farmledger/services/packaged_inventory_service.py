# farmledger/services/packaged_inventory_service.py

import logging
from typing import Any, Dict, List, Tuple

from farmledger.errors import FieldErrors, InsufficientStockError, NotFoundError
from farmledger.events import ModuleEvents
from farmledger.models.inventory_models import DEFAULT_REORDER_LEVEL, PackagedInventoryItem
from farmledger.services.base import LedgerService
from farmledger.services.form_utils import to_int
from farmledger.services.pricing_service import parse_unit_weight
from farmledger.store import PACKAGED_INVENTORY, PACKAGED_REORDER_LEVELS

logger = logging.getLogger(__name__)


class PackagedInventoryService(LedgerService):
    """
    Finished units per category, tracked as unit count and total kg.
    The set of categories always equals the category catalog.
    """

    # -------------------------------------------------
    # READ
    # -------------------------------------------------
    def list_items(self) -> List[PackagedInventoryItem]:
        return list(self.store.packaged_inventory)

    def get_item(self, category: str) -> PackagedInventoryItem:
        item = self.store.find_packaged(category)
        if not item:
            raise NotFoundError(f'Packaged category "{category}" not found.')
        return item

    def available_units(self, category: str) -> int:
        item = self.store.find_packaged(category)
        return item.units if item else 0

    def reorder_level(self, category: str) -> int:
        return self.store.packaged_reorder_levels.get(category) or DEFAULT_REORDER_LEVEL

    def reorder_levels(self) -> Dict[str, int]:
        return {p.category: self.reorder_level(p.category) for p in self.store.packaged_inventory}

    def is_low_stock(self, category: str) -> bool:
        return self.available_units(category) < self.reorder_level(category)

    def low_stock_items(self) -> List[Tuple[PackagedInventoryItem, int]]:
        return [
            (p, self.reorder_level(p.category))
            for p in self.store.packaged_inventory
            if self.is_low_stock(p.category)
        ]

    # -------------------------------------------------
    # ALIGNMENT
    # -------------------------------------------------
    def align(self, commit: bool = True) -> List[str]:
        """
        Make packaged categories match the catalog exactly: add missing
        categories at zero, drop orphans, keep reorder levels in step.
        Returns the keys it touched.
        """
        catalog = [c.category for c in self.store.category_pricing]
        wanted = set(catalog)

        for category in catalog:
            if not self.store.find_packaged(category):
                self.store.packaged_inventory.append(PackagedInventoryItem(category=category))

        dropped = [p.category for p in self.store.packaged_inventory if p.category not in wanted]
        if dropped:
            logger.info("Dropping packaged categories no longer priced: %s", dropped)
        self.store.packaged_inventory = [p for p in self.store.packaged_inventory if p.category in wanted]

        levels = self.store.packaged_reorder_levels
        for category in catalog:
            if category not in levels:
                levels[category] = DEFAULT_REORDER_LEVEL
        for category in list(levels):
            if category not in wanted:
                del levels[category]

        keys = [PACKAGED_INVENTORY, PACKAGED_REORDER_LEVELS]
        if commit:
            self._commit(None, None, *keys)
        return keys

    # -------------------------------------------------
    # MUTATIONS
    # -------------------------------------------------
    def credit(self, category: str, units: int, kg: float, commit: bool = True) -> PackagedInventoryItem:
        item = self.get_item(category)
        item.units += int(units)
        item.totalKg += float(kg)
        if commit:
            self._commit(ModuleEvents.INVENTORY, {"category": category, "units": units}, PACKAGED_INVENTORY)
        return item

    def debit(self, category: str, units: int, commit: bool = True) -> PackagedInventoryItem:
        item = self.get_item(category)
        if units > item.units:
            raise InsufficientStockError(
                f'Insufficient packaged inventory for category "{category}". '
                f"Available units: {item.units}."
            )

        item.units -= int(units)

        cat = self.store.find_category(category)
        unit_weight = parse_unit_weight(cat.weightInfo) if cat else None
        if unit_weight is None:
            # "Varies": average kg per unit of what is left after the sale
            unit_weight = item.totalKg / item.units if item.units > 0 else 0

        item.totalKg = max(0.0, item.totalKg - units * unit_weight)
        if item.units == 0 and item.totalKg < 1e-9:
            item.totalKg = 0.0

        if commit:
            self._commit(ModuleEvents.INVENTORY, {"category": category, "units": -units}, PACKAGED_INVENTORY)
        return item

    def set_reorder_level(self, category: str, level: Any) -> int:
        self.get_item(category)
        n = to_int(level)

        errs = FieldErrors()
        if n is None:
            errs.add("Reorder level must be a whole number.")
        elif n <= 0:
            errs.add("Reorder level must be greater than zero.")
        errs.raise_if_any()

        self.store.packaged_reorder_levels[category] = n
        self._commit(ModuleEvents.INVENTORY, {"category": category, "reorderLevel": n}, PACKAGED_REORDER_LEVELS)
        return n

