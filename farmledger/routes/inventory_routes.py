# farmledger/routes/inventory_routes.py

from flask import Blueprint, jsonify

from farmledger.routes.helpers import csv_response, dump, form_data, get_ledger

inventory_bp = Blueprint("inventory", __name__, url_prefix="/inventory")


# ----------------------------------------------------
# RAW INVENTORY
# ----------------------------------------------------
@inventory_bp.get("/raw")
def list_raw():
    raw = get_ledger().raw
    items = raw.list_items()
    return jsonify({
        "ok": True,
        "items": [{**i.model_dump(), "lowStock": raw.is_low_stock(i)} for i in items],
    })


@inventory_bp.post("/raw")
def add_raw_item():
    item = get_ledger().raw.add_item(form_data())
    return jsonify({"ok": True, "item": item.model_dump()}), 201


@inventory_bp.put("/raw/<item_id>")
def update_raw_item(item_id):
    item = get_ledger().raw.update_item(item_id, form_data())
    return jsonify({"ok": True, "item": item.model_dump()})


@inventory_bp.delete("/raw/<item_id>")
def delete_raw_item(item_id):
    get_ledger().raw.remove_item(item_id)
    return jsonify({"ok": True})


@inventory_bp.get("/raw/export")
def export_raw():
    return csv_response(get_ledger().exports.inventory_csv(), "inventory.csv")


# ----------------------------------------------------
# PACKAGED INVENTORY
# ----------------------------------------------------
@inventory_bp.get("/packaged")
def list_packaged():
    packaged = get_ledger().packaged
    return jsonify({
        "ok": True,
        "items": dump(packaged.list_items()),
        "reorderLevels": packaged.reorder_levels(),
    })


@inventory_bp.get("/reorder-levels")
def reorder_levels():
    return jsonify({"ok": True, "reorderLevels": get_ledger().packaged.reorder_levels()})


@inventory_bp.put("/reorder-levels/<path:category>")
def set_reorder_level(category):
    level = get_ledger().packaged.set_reorder_level(category, form_data().get("reorderLevel"))
    return jsonify({"ok": True, "category": category, "reorderLevel": level})


# ----------------------------------------------------
# PACKAGING
# ----------------------------------------------------
@inventory_bp.post("/packaging")
def package():
    data = form_data()
    result = get_ledger().packaging.package(
        data.get("rawCategory"), data.get("packagedCategory"), data.get("quantity")
    )
    return jsonify({"ok": True, "result": result.model_dump()})
