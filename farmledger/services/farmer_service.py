# farmledger/services/farmer_service.py

from typing import Any, Dict, List, Tuple

from farmledger.errors import FieldErrors, NotFoundError
from farmledger.models.farmer_models import Farmer
from farmledger.services.base import LedgerService
from farmledger.services.form_utils import EMAIL_RE, PHONE_RE, clean
from farmledger.services.raw_inventory_service import RawInventoryService
from farmledger.store import FARMERS, INVENTORY_ITEMS

FARMER_FIELDS = ("farmerId", "name", "phone", "email", "address", "region", "gps")


class FarmerService(LedgerService):
    """Supplier registry. Every farmer region has a raw inventory item."""

    def __init__(self, store, hub=None, today=None, raw=None):
        super().__init__(store, hub, today)
        self.raw = raw or RawInventoryService(store, hub, today)

    def list_farmers(self) -> List[Farmer]:
        return list(self.store.farmers)

    def get_farmer(self, farmer_id: str) -> Farmer:
        farmer = self.store.find_farmer(farmer_id)
        if not farmer:
            raise NotFoundError(f"Farmer '{farmer_id}' not found.")
        return farmer

    def search(self, term: str = "") -> List[Farmer]:
        q = clean(term).lower()
        if not q:
            return self.list_farmers()
        return [
            f for f in self.store.farmers
            if q in f.name.lower() or q in f.region.lower() or q in f.farmerId.lower()
        ]

    def upsert(self, form: Dict[str, Any]) -> Tuple[Farmer, bool]:
        """
        Adds a new farmer or updates the one with the same farmerId.
        Returns (farmer, created).
        """
        values = {k: clean(form.get(k)) for k in FARMER_FIELDS}

        errs = FieldErrors()
        missing = [k for k in FARMER_FIELDS if not values[k]]
        if missing:
            errs.add("All fields (ID, Name, Phone, Email, Address, Region, GPS) are required!")
        if values["phone"] and not PHONE_RE.match(values["phone"]):
            errs.add("Invalid phone format.")
        if values["email"] and not EMAIL_RE.match(values["email"]):
            errs.add("Invalid email address.")
        errs.raise_if_any()

        existing = self.store.find_farmer(values["farmerId"])
        if existing:
            for k, v in values.items():
                setattr(existing, k, v)
            farmer, created = existing, False
        else:
            farmer, created = Farmer(**values), True
            self.store.farmers.append(farmer)

        keys = [FARMERS]
        if self.raw.ensure_categories([farmer.region], commit=False):
            keys.append(INVENTORY_ITEMS)

        self._commit(None, None, *keys)
        return farmer, created

    def remove(self, farmer_id: str) -> None:
        self.get_farmer(farmer_id)
        self.store.farmers = [f for f in self.store.farmers if f.farmerId != farmer_id]
        self._commit(None, None, FARMERS)
