# farmledger/mongo_safe.py
from __future__ import annotations

import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)

# Prevent spamming logs on every call
_WARNED = False


def is_mongo_enabled() -> bool:
    """Mongo is enabled unless DISABLE_MONGO=1."""
    return os.getenv("DISABLE_MONGO", "0") != "1"


def get_db() -> Optional[object]:
    """
    Returns mongo.db if initialized, else None.
    Safe to call anywhere (won't crash at import time).
    """
    global _WARNED

    if not is_mongo_enabled():
        return None

    try:
        from farmledger.mongo import mongo
        db = getattr(mongo, "db", None)

        if db is None and not _WARNED:
            _WARNED = True
            logger.warning("Mongo is enabled by env, but not initialized (mongo.db is None).")
        return db

    except Exception as e:
        if not _WARNED:
            _WARNED = True
            logger.warning("Mongo unavailable: %s", e)
        return None


def get_col(name: str):
    """
    Convenience helper:
      col = get_col("ledger_state")
      if col is None: handle fallback
    """
    db = get_db()
    if db is None:
        return None
    try:
        return db[name]
    except Exception:
        return None
