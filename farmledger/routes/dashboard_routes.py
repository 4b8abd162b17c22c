# farmledger/routes/dashboard_routes.py

from flask import Blueprint, current_app, jsonify

from farmledger.routes.helpers import get_ledger

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/dashboard")


@dashboard_bp.get("/stats")
def stats():
    return jsonify({"ok": True, "stats": get_ledger().dashboard.stats().to_dict()})


@dashboard_bp.get("/charts")
def charts():
    series = get_ledger().dashboard.charts()
    return jsonify({"ok": True, "charts": {k: v.to_dict() for k, v in series.items()}})


@dashboard_bp.get("/activity")
def activity():
    items = get_ledger().dashboard.recent_activity()
    return jsonify({"ok": True, "activity": [i.to_dict() for i in items]})


@dashboard_bp.get("/alerts")
def alerts():
    found = get_ledger().alerts.evaluate()
    return jsonify({"ok": True, "alerts": [a.to_dict() for a in found]})


@dashboard_bp.post("/reset")
def reset():
    current_app.logger.warning("Dashboard reset requested")
    get_ledger().reset()
    return jsonify({"ok": True, "message": "All data has been reset."})
