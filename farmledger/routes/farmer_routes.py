# farmledger/routes/farmer_routes.py

from flask import Blueprint, jsonify, request

from farmledger.routes.helpers import csv_response, dump, form_data, get_ledger

farmers_bp = Blueprint("farmers", __name__, url_prefix="/farmers")


@farmers_bp.get("/")
def list_farmers():
    term = (request.args.get("q") or "").strip()
    farmers = get_ledger().farmers.search(term)
    return jsonify({"ok": True, "farmers": dump(farmers)})


@farmers_bp.get("/<farmer_id>")
def get_farmer(farmer_id):
    farmer = get_ledger().farmers.get_farmer(farmer_id)
    return jsonify({"ok": True, "farmer": farmer.model_dump()})


@farmers_bp.post("/")
def upsert_farmer():
    farmer, created = get_ledger().farmers.upsert(form_data())

    message = "Farmer added successfully!" if created else "Farmer updated successfully!"
    return jsonify({"ok": True, "message": message, "farmer": farmer.model_dump()}), (201 if created else 200)


@farmers_bp.delete("/<farmer_id>")
def delete_farmer(farmer_id):
    get_ledger().farmers.remove(farmer_id)
    return jsonify({"ok": True})


@farmers_bp.get("/export")
def export_farmers():
    return csv_response(get_ledger().exports.farmers_csv(), "farmers.csv")
