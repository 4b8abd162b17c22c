# farmledger/errors.py

from __future__ import annotations

from typing import Iterable, List, Optional, Type


class LedgerError(Exception):
    """
    Base error for every ledger operation.
    `errors` always holds the full list of messages so a caller can show
    all of them at once.
    """

    status_code = 500

    def __init__(self, message: str = "", errors: Optional[Iterable[str]] = None):
        self.errors: List[str] = list(errors or ([message] if message else []))
        self.message = message or (self.errors[0] if self.errors else self.__class__.__name__)
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"ok": False, "error": self.message, "errors": self.errors}


class ValidationError(LedgerError):
    status_code = 400


class NotFoundError(LedgerError):
    status_code = 404


class DuplicateKeyError(LedgerError):
    status_code = 409


class InsufficientStockError(LedgerError):
    status_code = 409


class PersistenceError(LedgerError):
    """Raised after an in-memory mutation completed but could not be saved."""

    status_code = 500

    def __init__(self, message: str = "", errors: Optional[Iterable[str]] = None, keys: Optional[Iterable[str]] = None):
        super().__init__(message, errors)
        self.keys: List[str] = list(keys or [])

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["persisted"] = False
        d["keys"] = self.keys
        return d


# most specific kind first
_PRIORITY: List[Type[LedgerError]] = [
    DuplicateKeyError,
    InsufficientStockError,
    NotFoundError,
    ValidationError,
]


class FieldErrors:
    """
    Collects form-level messages and raises them together.

        errs = FieldErrors()
        errs.add("Quantity must be a number.")
        errs.add("Order ID must be unique.", DuplicateKeyError)
        errs.raise_if_any()
    """

    def __init__(self) -> None:
        self.messages: List[str] = []
        self._kinds: List[Type[LedgerError]] = []

    def add(self, message: str, kind: Type[LedgerError] = ValidationError) -> None:
        self.messages.append(message)
        if kind not in self._kinds:
            self._kinds.append(kind)

    def __bool__(self) -> bool:
        return bool(self.messages)

    def __len__(self) -> int:
        return len(self.messages)

    def raise_if_any(self, summary: str = "Please correct the following errors") -> None:
        if not self.messages:
            return
        kind = next((k for k in _PRIORITY if k in self._kinds), ValidationError)
        raise kind(summary, self.messages)
