# farmledger/routes/purchase_routes.py

from flask import Blueprint, jsonify, request

from farmledger.routes.helpers import csv_response, dump, form_data, get_ledger

purchases_bp = Blueprint("purchases", __name__, url_prefix="/purchases")


@purchases_bp.get("/")
def list_purchases():
    return jsonify({"ok": True, "purchases": dump(get_ledger().purchases.list_purchases())})


@purchases_bp.get("/<purchase_id>")
def get_purchase(purchase_id):
    return jsonify({"ok": True, "purchase": get_ledger().purchases.get_purchase(purchase_id).model_dump()})


@purchases_bp.post("/")
def record_purchase():
    purchase = get_ledger().purchases.record(form_data())
    return jsonify({"ok": True, "purchase": purchase.model_dump()}), 201


@purchases_bp.put("/<purchase_id>")
def update_purchase(purchase_id):
    purchase = get_ledger().purchases.update(purchase_id, form_data())
    return jsonify({"ok": True, "purchase": purchase.model_dump()})


@purchases_bp.delete("/<purchase_id>")
def delete_purchase(purchase_id):
    get_ledger().purchases.remove(purchase_id)
    return jsonify({"ok": True})


@purchases_bp.get("/expenses")
def purchase_expenses():
    total = get_ledger().purchases.expenses_for_period(
        request.args.get("start"), request.args.get("end")
    )
    return jsonify({"ok": True, "expenses": total})


@purchases_bp.get("/export")
def export_purchases():
    return csv_response(get_ledger().exports.purchases_csv(), "purchases.csv")
