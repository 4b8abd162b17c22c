# farmledger/routes/order_routes.py

from flask import Blueprint, jsonify, request

from farmledger.routes.helpers import csv_response, dump, form_data, get_ledger

orders_bp = Blueprint("orders", __name__, url_prefix="/orders")


@orders_bp.get("/")
def list_orders():
    status = (request.args.get("status") or "").strip() or None
    return jsonify({"ok": True, "orders": dump(get_ledger().orders.list_orders(status))})


@orders_bp.get("/<order_id>")
def get_order(order_id):
    return jsonify({"ok": True, "order": get_ledger().orders.get_order(order_id).model_dump()})


@orders_bp.post("/")
def place_order():
    order = get_ledger().orders.place(form_data())
    return jsonify({"ok": True, "order": order.model_dump()}), 201


@orders_bp.patch("/<order_id>/status")
def update_status(order_id):
    order = get_ledger().orders.update_status(order_id, form_data().get("status"))
    return jsonify({"ok": True, "order": order.model_dump()})


@orders_bp.delete("/<order_id>")
def delete_order(order_id):
    get_ledger().orders.remove(order_id)
    return jsonify({"ok": True})


@orders_bp.get("/export")
def export_orders():
    return csv_response(get_ledger().exports.orders_csv(), "orders.csv")
