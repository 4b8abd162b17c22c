# farmledger/services/export_service.py

import csv
from io import StringIO
from typing import Any, Iterable, List, Mapping, Sequence

FARMER_HEADERS = ["farmerId", "name", "phone", "email", "address", "region", "gps"]
PURCHASE_HEADERS = ["purchaseId", "farmerId", "date", "quantity", "pricePerKg", "totalCost"]
ORDER_HEADERS = [
    "orderId", "customerName", "customerContact", "category",
    "quantity", "totalPrice", "status", "date",
]
INVENTORY_HEADERS = ["itemId", "category", "quantity", "reorderLevel", "restockDate", "storageLocation"]
REPORT_HEADERS = ["parameter", "value"]


def _as_row(record: Any) -> Mapping[str, Any]:
    if hasattr(record, "model_dump"):
        return record.model_dump()
    return record


def to_csv(records: Iterable[Any], headers: Sequence[str]) -> str:
    """
    Header line, then one line per record in header order.
    Fields containing a comma are quoted; every line ends with "\\n".
    """
    si = StringIO()
    writer = csv.DictWriter(
        si,
        fieldnames=list(headers),
        extrasaction="ignore",
        restval="",
        lineterminator="\n",
    )
    writer.writeheader()
    for record in records:
        row = _as_row(record)
        writer.writerow({h: ("" if row.get(h) is None else row.get(h)) for h in headers})
    return si.getvalue()


class ExportService:
    """CSV documents for each ledger."""

    def __init__(self, store, reports=None):
        self.store = store
        self.reports = reports

    def farmers_csv(self) -> str:
        return to_csv(self.store.farmers, FARMER_HEADERS)

    def purchases_csv(self) -> str:
        return to_csv(self.store.purchases, PURCHASE_HEADERS)

    def orders_csv(self) -> str:
        return to_csv(self.store.orders, ORDER_HEADERS)

    def inventory_csv(self) -> str:
        return to_csv(self.store.inventory_items, INVENTORY_HEADERS)

    def report_csv(self) -> str:
        rows: List[dict] = self.reports.last_report_rows()
        return to_csv(rows, REPORT_HEADERS)
