import pytest

from farmledger.errors import NotFoundError, ValidationError

from conftest import NORTH_FARMER, SOUTH_FARMER


def test_add_and_update(ledger):
    farmer, created = ledger.farmers.upsert(NORTH_FARMER)
    assert created
    assert farmer.region == "North"

    farmer, created = ledger.farmers.upsert({**NORTH_FARMER, "name": "Asha P."})
    assert not created
    assert len(ledger.farmers.list_farmers()) == 1
    assert ledger.farmers.get_farmer("F1").name == "Asha P."


def test_validation(ledger):
    with pytest.raises(ValidationError) as exc:
        ledger.farmers.upsert({"farmerId": "F9", "phone": "abc", "email": "bad"})
    assert len(exc.value.errors) == 3
    assert ledger.farmers.list_farmers() == []


def test_search(ledger):
    ledger.farmers.upsert(NORTH_FARMER)
    ledger.farmers.upsert(SOUTH_FARMER)

    assert [f.farmerId for f in ledger.farmers.search("south")] == ["F2"]
    assert [f.farmerId for f in ledger.farmers.search("ASHA")] == ["F1"]
    assert len(ledger.farmers.search("")) == 2


def test_remove(ledger):
    ledger.farmers.upsert(NORTH_FARMER)
    ledger.farmers.remove("F1")
    assert ledger.farmers.list_farmers() == []

    with pytest.raises(NotFoundError):
        ledger.farmers.remove("F1")


def test_new_region_gets_raw_item(ledger):
    ledger.farmers.upsert(NORTH_FARMER)

    item = ledger.raw.get_item("North")
    assert item.quantity == 0
    assert ledger.store.provider.get("inventoryItems")[0]["category"] == "North"


def test_region_change_adds_new_raw_item(ledger):
    ledger.farmers.upsert(NORTH_FARMER)
    ledger.farmers.upsert({**NORTH_FARMER, "region": "East"})

    assert {i.category for i in ledger.raw.list_items()} == {"North", "East"}
