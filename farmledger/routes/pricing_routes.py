# farmledger/routes/pricing_routes.py

from flask import Blueprint, jsonify

from farmledger.routes.helpers import dump, form_data, get_ledger

pricing_bp = Blueprint("pricing", __name__, url_prefix="/pricing")


@pricing_bp.get("/")
def list_categories():
    return jsonify({"ok": True, "categories": dump(get_ledger().pricing.list_categories())})


@pricing_bp.post("/")
def upsert_category():
    data = form_data()
    cat = get_ledger().pricing.upsert_category(
        data.get("category"), data.get("weightInfo"), data.get("price")
    )
    return jsonify({"ok": True, "category": cat.model_dump()})


@pricing_bp.delete("/<path:category>")
def delete_category(category):
    get_ledger().pricing.remove_category(category)
    return jsonify({"ok": True})
