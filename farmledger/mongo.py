# farmledger/mongo.py
from __future__ import annotations

import logging
import os

from flask_pymongo import PyMongo

logger = logging.getLogger(__name__)

mongo = PyMongo()


def init_mongo(app):
    """
    Binds Flask-PyMongo to the app and reports how many ledger keys the
    state collection already holds.
    Requires app.config["MONGO_URI"] or env var MONGO_URI.
    """

    if not app.config.get("MONGO_URI"):
        app.config["MONGO_URI"] = os.getenv("MONGO_URI")

    # missing URI: leave mongo unbound, ledger reads fall back to seeded defaults
    if not app.config.get("MONGO_URI"):
        logger.warning("MONGO_URI not set; ledger state will not be loaded from Mongo.")
        return mongo

    collection_name = app.config.get("LEDGER_COLLECTION") or "ledger_state"
    try:
        mongo.init_app(app)
        stored = mongo.db[collection_name].count_documents({})
        logger.info("Mongo initialized: %s holds %d ledger keys", collection_name, stored)
    except Exception as e:
        # keep the app up; ledger writes will surface PersistenceError
        logger.warning("Mongo init failed for %s: %s", collection_name, e)

    return mongo
