import logging

import pytest

from farmledger.errors import PersistenceError
from farmledger.ledger import FarmLedger
from farmledger.store import (
    INVENTORY_ITEMS,
    LedgerStore,
    MemoryKeyValueStore,
    MongoKeyValueStore,
)

from conftest import NORTH_FARMER, fixed_today


class FailingStore(MemoryKeyValueStore):
    def __init__(self, fail_keys=()):
        super().__init__()
        self.fail_keys = set(fail_keys)

    def set(self, key, value):
        if key in self.fail_keys:
            raise OSError("disk full")
        super().set(key, value)


class FakeCollection:
    """Just enough of a pymongo collection for the key-value store."""

    def __init__(self):
        self.docs = {}

    def find_one(self, query):
        return self.docs.get(query["_id"])

    def update_one(self, query, update, upsert=False):
        doc = self.docs.setdefault(query["_id"], {"_id": query["_id"]})
        doc.update(update["$set"])


def test_memory_store_returns_copies():
    kv = MemoryKeyValueStore({"orders": [{"orderId": "O1"}]})
    value = kv.get("orders")
    value.append({"orderId": "O2"})

    assert kv.get("orders") == [{"orderId": "O1"}]
    assert kv.get("missing") is None


def test_empty_provider_gets_seeded_defaults():
    store = LedgerStore(MemoryKeyValueStore())

    assert len(store.category_pricing) == 7
    assert {p.category for p in store.packaged_inventory} == {c.category for c in store.category_pricing}
    assert store.farmers == []
    assert store.orders == []


def test_state_survives_reload(north, provider):
    reloaded = LedgerStore(provider)

    assert reloaded.find_farmer("F1").region == "North"
    assert reloaded.find_purchase("P1").totalCost == 200
    assert reloaded.find_raw_item("North").quantity == 100


def test_failed_save_keeps_memory_and_reports_keys():
    ledger = FarmLedger(FailingStore(), today=fixed_today)
    ledger.initialize()
    ledger.farmers.upsert(NORTH_FARMER)
    ledger.store.provider.fail_keys = {INVENTORY_ITEMS}

    with pytest.raises(PersistenceError) as exc:
        ledger.purchases.record({
            "purchaseId": "P1",
            "farmerId": "F1",
            "date": "2024-06-01",
            "quantity": "5",
            "pricePerKg": "2",
        })

    assert exc.value.keys == [INVENTORY_ITEMS]
    assert exc.value.to_dict()["persisted"] is False
    # in-memory mutation completed and the event still went out
    assert ledger.raw.quantity("North") == 5
    assert ledger.store.provider.get("purchases")[0]["purchaseId"] == "P1"
    assert any(a.type == "inventory" for a in ledger.hub.latest["alerts"])


def test_failed_save_is_reported_when_a_recomputation_also_fails():
    ledger = FarmLedger(FailingStore(), today=fixed_today)
    ledger.initialize()
    ledger.farmers.upsert(NORTH_FARMER)
    ledger.store.provider.fail_keys = {INVENTORY_ITEMS}

    def broken_report():
        raise RuntimeError("report crashed")

    ledger.hub.register("report", broken_report)

    with pytest.raises(PersistenceError) as exc:
        ledger.purchases.record({
            "purchaseId": "P1",
            "farmerId": "F1",
            "date": "2024-06-01",
            "quantity": "5",
            "pricePerKg": "2",
        })

    assert exc.value.keys == [INVENTORY_ITEMS]
    # recomputations after the broken one still ran
    assert any(a.type == "inventory" for a in ledger.hub.latest["alerts"])


def test_mongo_store_round_trip():
    col = FakeCollection()
    ledger = FarmLedger(MongoKeyValueStore(collection=col), today=fixed_today)
    ledger.initialize()
    ledger.farmers.upsert(NORTH_FARMER)

    assert col.docs["farmers"]["value"][0]["farmerId"] == "F1"
    assert "updated_at" in col.docs["farmers"]

    reloaded = LedgerStore(MongoKeyValueStore(collection=col))
    assert reloaded.find_farmer("F1").name == NORTH_FARMER["name"]


def test_mongo_disabled(monkeypatch):
    monkeypatch.setenv("DISABLE_MONGO", "1")
    kv = MongoKeyValueStore()

    assert kv.get("farmers") is None
    with pytest.raises(PersistenceError):
        kv.set("farmers", [])


def test_reset(north, provider):
    north.store.reset()

    assert north.store.farmers == []
    assert provider.get("purchases") == []
    assert len(provider.get("categoryPricing")) == 7
    assert set(provider.get("packagedReorderLevels").values()) == {10}


def test_init_mongo_without_uri_logs_warning(monkeypatch, caplog):
    from flask import Flask

    from farmledger.mongo import init_mongo, mongo

    monkeypatch.delenv("MONGO_URI", raising=False)
    app = Flask(__name__)

    with caplog.at_level(logging.WARNING, logger="farmledger.mongo"):
        assert init_mongo(app) is mongo

    assert "MONGO_URI not set" in caplog.text


def test_init_mongo_failure_keeps_app_up(monkeypatch, caplog):
    from flask import Flask

    import farmledger.mongo as mongo_module

    class BrokenPyMongo:
        def init_app(self, app):
            raise ConnectionError("no route to host")

    monkeypatch.setattr(mongo_module, "mongo", BrokenPyMongo())
    app = Flask(__name__)
    app.config["MONGO_URI"] = "mongodb://unreachable:27017/farm"
    app.config["LEDGER_COLLECTION"] = "farm_state"

    with caplog.at_level(logging.WARNING, logger="farmledger.mongo"):
        mongo_module.init_mongo(app)

    assert "Mongo init failed for farm_state: no route to host" in caplog.text
