# farmledger/services/base.py

from datetime import date
from typing import Any, Callable, Optional

from farmledger.events import EventHub, ModuleEvents
from farmledger.store import LedgerStore


class LedgerService:
    """Shared wiring: the injected store, the event hub and a clock."""

    def __init__(
        self,
        store: LedgerStore,
        hub: Optional[EventHub] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        self.store = store
        self.hub = hub
        self._today = today or date.today

    def today(self) -> date:
        return self._today()

    def _commit(self, event: Optional[ModuleEvents], data: Any, *keys: str) -> None:
        """Persist the touched keys, then publish even if saving failed."""
        try:
            self.store.commit(*keys)
        finally:
            if event is not None and self.hub is not None:
                self.hub.publish(event, data)
