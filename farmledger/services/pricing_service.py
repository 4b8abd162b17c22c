# farmledger/services/pricing_service.py

import logging
from typing import Any, List, Optional

from farmledger.errors import FieldErrors, NotFoundError
from farmledger.events import ModuleEvents
from farmledger.models.pricing_models import VARIES, CategoryPricing
from farmledger.services.base import LedgerService
from farmledger.services.form_utils import WEIGHT_INFO_RE, clean, leading_number, to_float
from farmledger.store import CATEGORY_PRICING

logger = logging.getLogger(__name__)


def parse_unit_weight(weight_info: str) -> Optional[float]:
    """Unit weight in kg, or None for "Varies" (or anything non-numeric)."""
    n = leading_number(weight_info)
    if n is None or n <= 0:
        return None
    return n


class PricingService(LedgerService):
    """
    Category catalog: packaging tiers with unit weight and unit price.
    Every change re-aligns the packaged inventory ledger.
    """

    def __init__(self, store, hub=None, today=None, packaged=None):
        super().__init__(store, hub, today)
        self.packaged = packaged

    def list_categories(self) -> List[CategoryPricing]:
        return list(self.store.category_pricing)

    def get_category(self, category: str) -> CategoryPricing:
        cat = self.store.find_category(category)
        if not cat:
            raise NotFoundError(f'Category "{category}" not found.')
        return cat

    def unit_weight(self, category: str) -> Optional[float]:
        return parse_unit_weight(self.get_category(category).weightInfo)

    def upsert_category(self, category: Any, weight_info: Any, price: Any) -> CategoryPricing:
        category = clean(category)
        weight_info = clean(weight_info)
        price_n = to_float(price)

        errs = FieldErrors()
        if not category:
            errs.add("Product Category is required.")

        if not weight_info:
            errs.add("Weight Info is required.")
        elif weight_info != VARIES and not WEIGHT_INFO_RE.match(weight_info):
            errs.add("Weight Info must be a valid format (e.g., '0.5 kg') or 'Varies'.")

        if price_n is None:
            errs.add("Price must be a number.")
        elif price_n <= 0:
            errs.add("Price must be greater than zero.")

        errs.raise_if_any()

        cat = self.store.find_category(category)
        if cat:
            cat.weightInfo = weight_info
            cat.price = price_n
        else:
            cat = CategoryPricing(category=category, weightInfo=weight_info, price=price_n)
            self.store.category_pricing.append(cat)
        logger.info('Category "%s" set to %s at %.2f', category, weight_info, price_n)

        self._after_change(category)
        return cat

    def remove_category(self, category: str) -> None:
        cat = self.get_category(category)
        self.store.category_pricing = [c for c in self.store.category_pricing if c is not cat]
        self._after_change(category)

    def _after_change(self, category: str) -> None:
        keys = [CATEGORY_PRICING]
        if self.packaged is not None:
            keys.extend(self.packaged.align(commit=False))
        self._commit(ModuleEvents.PRICING, {"category": category}, *keys)
