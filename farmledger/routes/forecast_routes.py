# farmledger/routes/forecast_routes.py

from flask import Blueprint, jsonify

from farmledger.routes.helpers import dump, get_ledger

forecast_bp = Blueprint("forecast", __name__, url_prefix="/forecast")


@forecast_bp.get("/")
def forecast_all():
    forecasts = get_ledger().forecast.forecast_all()
    return jsonify({"ok": True, "forecasts": {k: v.model_dump() for k, v in forecasts.items()}})


@forecast_bp.get("/demand")
def forecast_demand():
    return jsonify({"ok": True, "recommendations": dump(get_ledger().forecast.forecast_demand())})


@forecast_bp.get("/<path:category>")
def forecast_category(category):
    return jsonify({"ok": True, "forecast": get_ledger().forecast.forecast(category).model_dump()})
