# app.py (local + gunicorn)

from flask import Flask, jsonify
from flask_cors import CORS

from farmledger.app_config import load_config
from farmledger.errors import LedgerError
from farmledger.ledger import FarmLedger
from farmledger.mongo import init_mongo
from farmledger.register_blueprints import register_all_blueprints
from farmledger.routes.helpers import LEDGER_EXTENSION
from farmledger.store import MemoryKeyValueStore, MongoKeyValueStore


def _build_provider(app):
    if app.config["LEDGER_STORE"] != "mongo":
        print("✓ Using in-memory ledger store")
        return MemoryKeyValueStore()

    if app.config["DISABLE_MONGO"]:
        print("⚠️ Mongo disabled by DISABLE_MONGO=1 (saves will fail)")
    else:
        init_mongo(app)
        print("✅ Mongo init attempted")
    return MongoKeyValueStore(app.config["LEDGER_COLLECTION"])


def create_app(config_overrides=None, provider=None, today=None):
    app = Flask(__name__)

    # -------------------------
    # Config
    # -------------------------
    load_config(app, config_overrides)
    app.secret_key = app.config["SECRET_KEY"]

    CORS(app, resources={r"/*": {"origins": "*"}})

    # -------------------------
    # Ledger
    # -------------------------
    ledger = FarmLedger(
        provider or _build_provider(app),
        today=today,
        revenue_threshold=app.config["REVENUE_ALERT_THRESHOLD"],
        refresh_seconds=app.config["DASHBOARD_REFRESH_SECONDS"],
    )
    ledger.initialize()
    app.extensions[LEDGER_EXTENSION] = ledger

    # -------------------------
    # Errors
    # -------------------------
    @app.errorhandler(LedgerError)
    def _ledger_error(e):
        if e.status_code >= 500:
            app.logger.error("%s: %s", type(e).__name__, e.errors)
        else:
            app.logger.info("%s: %s", type(e).__name__, e.errors)
        return jsonify(e.to_dict()), e.status_code

    # -------------------------
    # Blueprints
    # -------------------------
    register_all_blueprints(app)

    return app


# Local run only
if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
