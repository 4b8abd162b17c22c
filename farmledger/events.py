# farmledger/events.py

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, Tuple

logger = logging.getLogger(__name__)


class ModuleEvents(str, Enum):
    PURCHASE = "purchase"
    SALE = "sale"
    INVENTORY = "inventory"
    FINANCIAL = "financial"
    PRICING = "pricing"


# Recomputations triggered by each event, run in this order.
# Alerts are re-evaluated after every ledger mutation.
DOWNSTREAM: Dict[ModuleEvents, Tuple[str, ...]] = {
    ModuleEvents.PURCHASE: ("financial", "report", "alerts"),
    ModuleEvents.SALE: ("revenue", "report", "forecast", "alerts"),
    ModuleEvents.INVENTORY: ("forecast", "alerts"),
    ModuleEvents.FINANCIAL: ("revenue", "financial", "report", "alerts"),
    ModuleEvents.PRICING: ("forecast", "alerts"),
}


class EventHub:
    """
    Explicit fan-out after a ledger mutation.

        hub.register("alerts", alert_service.evaluate)
        hub.publish(ModuleEvents.SALE, {"orderId": "O1"})

    The latest result of every recomputation is kept in `hub.latest`.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, Callable[[], Any]] = {}
        self.latest: Dict[str, Any] = {}

    def register(self, name: str, handler: Callable[[], Any]) -> None:
        self._handlers[name] = handler

    def publish(self, event: ModuleEvents, data: Any = None) -> Dict[str, Any]:
        logger.info("Processing %s event: %s", event.value, data)
        return self._run(DOWNSTREAM.get(event, ()), event.value)

    def refresh(self, *names: str) -> Dict[str, Any]:
        """Run named recomputations outside of an event (startup, explicit refresh)."""
        return self._run(names or tuple(self._handlers), "refresh")

    def _run(self, names, trigger: str) -> Dict[str, Any]:
        """
        A failing recomputation is logged and skipped; the others still run
        and its previous result stays in `latest`.
        """
        results: Dict[str, Any] = {}
        for name in names:
            handler = self._handlers.get(name)
            if handler is None:
                continue
            try:
                results[name] = handler()
            except Exception:
                logger.exception("Recomputation %s failed after %s", name, trigger)
                continue
            self.latest[name] = results[name]
        return results
