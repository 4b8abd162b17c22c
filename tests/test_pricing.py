import pytest

from farmledger.errors import NotFoundError, ValidationError
from farmledger.models.pricing_models import DEFAULT_CATEGORY_PRICING
from farmledger.services.pricing_service import parse_unit_weight


def _packaged_categories(ledger):
    return {p.category for p in ledger.store.packaged_inventory}


def _catalog(ledger):
    return {c.category for c in ledger.store.category_pricing}


def test_default_catalog_is_seeded_and_aligned(ledger):
    assert len(ledger.pricing.list_categories()) == len(DEFAULT_CATEGORY_PRICING)
    assert _packaged_categories(ledger) == _catalog(ledger)
    assert set(ledger.packaged.reorder_levels().values()) == {10}


def test_parse_unit_weight():
    assert parse_unit_weight("0.25 kg") == 0.25
    assert parse_unit_weight("2kg") == 2.0
    assert parse_unit_weight("Varies") is None
    assert parse_unit_weight("0 kg") is None


def test_new_category_gets_empty_packaged_entry(ledger):
    ledger.pricing.upsert_category("Jumbo (10kg)", "10 kg", 200)

    item = ledger.packaged.get_item("Jumbo (10kg)")
    assert item.units == 0
    assert item.totalKg == 0
    assert ledger.packaged.reorder_level("Jumbo (10kg)") == 10
    assert _packaged_categories(ledger) == _catalog(ledger)


def test_update_keeps_packaged_stock(stocked):
    stocked.pricing.upsert_category("Medium (250g)", "0.25 kg", 12)

    assert stocked.pricing.get_category("Medium (250g)").price == 12
    assert stocked.packaged.available_units("Medium (250g)") == 200


def test_invalid_category_reports_every_problem(ledger):
    with pytest.raises(ValidationError) as exc:
        ledger.pricing.upsert_category("Odd", "ten kilos", -1)

    assert len(exc.value.errors) == 2
    assert ledger.store.find_category("Odd") is None


def test_varies_is_accepted(ledger):
    cat = ledger.pricing.upsert_category("Gift Box", "Varies", 40)
    assert cat.weightInfo == "Varies"
    assert ledger.pricing.unit_weight("Gift Box") is None


def test_remove_category_keeps_alignment(ledger):
    ledger.pricing.remove_category("Small (100g)")

    assert "Small (100g)" not in _catalog(ledger)
    assert _packaged_categories(ledger) == _catalog(ledger)
    assert "Small (100g)" not in ledger.store.packaged_reorder_levels


def test_remove_unknown_category(ledger):
    with pytest.raises(NotFoundError):
        ledger.pricing.remove_category("Nope")


def test_category_change_is_persisted(ledger, provider):
    ledger.pricing.upsert_category("Jumbo (10kg)", "10 kg", 200)

    saved = {c["category"] for c in provider.get("categoryPricing")}
    packaged = {p["category"] for p in provider.get("packagedInventory")}
    assert "Jumbo (10kg)" in saved
    assert saved == packaged
