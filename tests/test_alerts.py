from farmledger.ledger import FarmLedger
from farmledger.store import MemoryKeyValueStore

from conftest import NORTH_FARMER, fixed_today


def _by_type(alerts, kind):
    return [a for a in alerts if a.type == kind]


def test_fresh_ledger_alerts(ledger):
    alerts = ledger.alerts.evaluate()

    assert len(_by_type(alerts, "packaged")) == 7
    assert _by_type(alerts, "inventory") == []
    financial = _by_type(alerts, "financial")
    assert len(financial) == 1
    assert financial[0].severity == "medium"


def test_low_raw_stock_alert(ledger):
    ledger.farmers.upsert(NORTH_FARMER)
    ledger.purchases.record({
        "purchaseId": "P1",
        "farmerId": "F1",
        "date": "2024-06-01",
        "quantity": "5",
        "pricePerKg": "2",
    })

    inventory = _by_type(ledger.alerts.evaluate(), "inventory")
    assert [a.message for a in inventory] == ["Low stock alert: North (5 units remaining)"]
    assert inventory[0].severity == "high"


def test_packaged_alert_message(ledger):
    messages = [a.message for a in _by_type(ledger.alerts.evaluate(), "packaged")]
    assert "Medium (250g) is below 10 units!" in messages


def test_stocked_category_has_no_packaged_alert(stocked):
    categories = [a.message for a in _by_type(stocked.alerts.evaluate(), "packaged")]
    assert not any(m.startswith("Medium (250g)") for m in categories)


def test_revenue_threshold_is_configurable():
    ledger = FarmLedger(MemoryKeyValueStore(), today=fixed_today, revenue_threshold=0)
    ledger.initialize()
    assert _by_type(ledger.alerts.evaluate(), "financial") == []


def test_alerts_recomputed_after_mutation(north):
    latest = north.hub.latest["alerts"]
    assert not any(a.type == "inventory" for a in latest)

    north.packaging.package("North", "Medium (250g)", 95)

    latest = north.hub.latest["alerts"]
    assert [a.message for a in latest if a.type == "inventory"] == [
        "Low stock alert: North (5 units remaining)"
    ]
