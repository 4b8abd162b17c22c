import csv
import json
from io import StringIO

import pytest

from farmledger.errors import ValidationError

ORDER = {
    "orderId": "O1",
    "customerName": "Meera Shah",
    "customerContact": "9876543210",
    "category": "Medium (250g)",
    "quantity": "10",
    "date": "2024-06-10",
}


@pytest.fixture
def sold(stocked):
    stocked.orders.place(ORDER)
    return stocked


def test_generate_report(sold):
    r = sold.reports.generate()

    assert r.totalIncome == 100
    assert r.totalExpenses == 200
    assert r.taxApplied == pytest.approx(10)
    assert r.netProfit == pytest.approx(-110)
    assert r.unitsSoldPerCategory == {"Medium (250g)": 10}

    remaining = {s.category: s.units for s in r.remainingPackagedStockPerCategory}
    assert remaining["Medium (250g)"] == 190
    assert len(remaining) == 7


def test_date_range(sold):
    r = sold.reports.generate("2024-06-05", "2024-06-30")
    assert r.totalExpenses == 0
    assert r.totalIncome == 100
    assert r.startDate == "2024-06-05"


def test_invalid_dates(sold):
    with pytest.raises(ValidationError) as exc:
        sold.reports.generate("soon", "later")
    assert len(exc.value.errors) == 2


def test_report_csv(sold):
    sold.reports.generate()
    rows = list(csv.DictReader(StringIO(sold.exports.report_csv())))

    values = {r["parameter"]: r["value"] for r in rows}
    assert values["Start Date"] == ""
    assert values["Total Income"] == "100.00"
    assert values["Net Profit"] == "-110.00"
    assert json.loads(values["Products Sold (per category)"]) == {"Medium (250g)": 10}


def test_report_regenerated_after_sale(sold):
    sold.reports.generate()
    sold.orders.place({**ORDER, "orderId": "O2", "quantity": "5"})

    latest = sold.hub.latest["report"]
    assert latest.totalIncome == 150
    assert sold.reports.last_report is latest


def test_no_report_until_generated(ledger):
    assert ledger.reports.refresh() is None
    assert ledger.reports.last_report is None
