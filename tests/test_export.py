import csv
from io import StringIO

import pytest

from farmledger.errors import NotFoundError
from farmledger.services.export_service import FARMER_HEADERS, to_csv

from conftest import NORTH_FARMER, SOUTH_FARMER


def test_header_and_row_layout():
    out = to_csv([{"a": "1", "b": "x"}, {"a": "2", "b": ""}], ["a", "b"])
    assert out == "a,b\n1,x\n2,\n"


def test_comma_fields_are_quoted():
    out = to_csv([{"a": "one, two", "b": 3}], ["a", "b"])
    assert out.splitlines()[1] == '"one, two",3'


def test_farmer_export_parses_back(ledger):
    ledger.farmers.upsert({**NORTH_FARMER, "address": "12 Mill Road, Pune"})
    ledger.farmers.upsert(SOUTH_FARMER)

    out = ledger.exports.farmers_csv()
    assert out.startswith(",".join(FARMER_HEADERS) + "\n")

    rows = list(csv.DictReader(StringIO(out)))
    assert len(rows) == 2
    assert rows[0]["address"] == "12 Mill Road, Pune"
    assert rows[1] == {k: SOUTH_FARMER[k] for k in FARMER_HEADERS}


def test_purchase_and_inventory_exports(north):
    purchases = list(csv.DictReader(StringIO(north.exports.purchases_csv())))
    assert purchases[0]["purchaseId"] == "P1"
    assert float(purchases[0]["totalCost"]) == 200

    inventory = list(csv.DictReader(StringIO(north.exports.inventory_csv())))
    assert inventory[0]["category"] == "North"
    assert inventory[0]["storageLocation"] == "Main Warehouse"


def test_order_export(stocked):
    stocked.orders.place({
        "orderId": "O1",
        "customerName": "Meera Shah",
        "customerContact": "9876543210",
        "category": "Medium (250g)",
        "quantity": "10",
        "date": "2024-06-10",
    })
    rows = list(csv.DictReader(StringIO(stocked.exports.orders_csv())))
    assert rows[0]["status"] == "Pending"
    assert rows[0]["category"] == "Medium (250g)"


def test_report_export_requires_a_report(ledger):
    with pytest.raises(NotFoundError):
        ledger.exports.report_csv()
