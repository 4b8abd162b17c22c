# farmledger/models/inventory_models.py
from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_REORDER_LEVEL = 10
DEFAULT_STORAGE_LOCATION = "Main Warehouse"


class RawInventoryItem(BaseModel):
    """Unpackaged stock in kg. One item per category (farmer region)."""
    itemId: str = Field(..., min_length=1)
    category: str
    quantity: float = Field(0, ge=0)
    reorderLevel: float = Field(DEFAULT_REORDER_LEVEL, ge=0)
    restockDate: Optional[str] = ""
    storageLocation: str = DEFAULT_STORAGE_LOCATION


class PackagedInventoryItem(BaseModel):
    category: str
    units: int = Field(0, ge=0)
    totalKg: float = Field(0, ge=0)


class PackagingResult(BaseModel):
    rawCategory: str
    packagedCategory: str
    quantityKg: float
    unitWeight: float
    unitsAdded: int
    kgAdded: float
    rawRemaining: float
