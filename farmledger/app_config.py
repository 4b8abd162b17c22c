# farmledger/app_config.py

import os


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def load_config(app, overrides=None):
    """
    Load all Flask configuration in a clean centralized way.
    `overrides` (tests, scripts) win over the environment.
    """
    # ------------------------------
    # Storage
    # ------------------------------
    app.config["LEDGER_STORE"] = os.getenv("LEDGER_STORE", "memory").strip().lower()
    app.config["DISABLE_MONGO"] = os.getenv("DISABLE_MONGO", "0") == "1"
    app.config["MONGO_URI"] = os.getenv(
        "MONGO_URI",
        "mongodb://localhost:27017/farm_ledger_db"
    )
    app.config["LEDGER_COLLECTION"] = os.getenv("LEDGER_COLLECTION", "ledger_state")

    # ------------------------------
    # Alerts & dashboard
    # ------------------------------
    app.config["REVENUE_ALERT_THRESHOLD"] = _float_env("REVENUE_ALERT_THRESHOLD", 10000.0)
    app.config["DASHBOARD_REFRESH_SECONDS"] = _int_env("DASHBOARD_REFRESH_SECONDS", 30)

    # ------------------------------
    # Security Keys
    # ------------------------------
    app.config["SECRET_KEY"] = os.getenv("SECRET_KEY", os.urandom(24))

    if overrides:
        app.config.update(overrides)

    print("✓ Config Loaded Successfully")
