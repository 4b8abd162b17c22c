# farmledger/services/packaging_service.py

import logging
import math
from typing import Any

from farmledger.errors import FieldErrors, InsufficientStockError, ValidationError
from farmledger.events import ModuleEvents
from farmledger.models.inventory_models import PackagingResult
from farmledger.services.base import LedgerService
from farmledger.services.form_utils import clean, to_float
from farmledger.services.packaged_inventory_service import PackagedInventoryService
from farmledger.services.pricing_service import parse_unit_weight
from farmledger.services.raw_inventory_service import RawInventoryService
from farmledger.store import INVENTORY_ITEMS, PACKAGED_INVENTORY

logger = logging.getLogger(__name__)


class PackagingService(LedgerService):
    """Converts raw kg into packaged units of a catalog category."""

    def __init__(self, store, hub=None, today=None, raw=None, packaged=None):
        super().__init__(store, hub, today)
        self.raw = raw or RawInventoryService(store, hub, today)
        self.packaged = packaged or PackagedInventoryService(store, hub, today)

    def package(self, raw_category: Any, packaged_category: Any, quantity_kg: Any) -> PackagingResult:
        raw_category = clean(raw_category)
        packaged_category = clean(packaged_category)
        qty = to_float(quantity_kg)

        errs = FieldErrors()
        if not raw_category:
            errs.add("Raw category is required.")
        elif not self.store.find_raw_item(raw_category):
            errs.add(f"Raw category '{raw_category}' does not exist.")

        cat = None
        if not packaged_category:
            errs.add("Packaged category is required.")
        else:
            cat = self.store.find_category(packaged_category)
            if not cat or not self.store.find_packaged(packaged_category):
                errs.add(f"Packaged category '{packaged_category}' does not exist.")

        if qty is None:
            errs.add("Quantity must be a number.")
        elif qty <= 0:
            errs.add("Quantity must be greater than zero.")
        errs.raise_if_any()

        available = self.raw.quantity(raw_category)
        if available < qty:
            raise InsufficientStockError(
                f"Insufficient raw inventory for {raw_category}. Available: {available}kg"
            )

        # "Varies" packs the whole quantity as a single unit
        unit_weight = parse_unit_weight(cat.weightInfo)
        if unit_weight is None:
            unit_weight = qty

        units_to_add = math.floor(qty / unit_weight)
        if units_to_add <= 0:
            raise ValidationError("Quantity too low to form at least one unit.")

        # converted kg can be less than consumed kg; the remainder is not tracked
        kg_added = units_to_add * unit_weight

        raw_item = self.raw.debit(raw_category, qty, commit=False)
        self.packaged.credit(packaged_category, units_to_add, kg_added, commit=False)

        logger.info(
            'Packaged %d unit(s) of "%s" from "%s" (%.3f kg)',
            units_to_add, packaged_category, raw_category, qty,
        )

        result = PackagingResult(
            rawCategory=raw_category,
            packagedCategory=packaged_category,
            quantityKg=qty,
            unitWeight=unit_weight,
            unitsAdded=units_to_add,
            kgAdded=kg_added,
            rawRemaining=raw_item.quantity,
        )
        self._commit(ModuleEvents.INVENTORY, result.model_dump(), INVENTORY_ITEMS, PACKAGED_INVENTORY)
        return result
