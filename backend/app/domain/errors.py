"""Store error taxonomy shared by the ledger and recipe domains."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Dict

__all__ = [
    "EntryNotFoundError",
    "EntryValidationError",
    "StoreError",
    "StoreUnavailableError",
]


class StoreError(Exception):
    """Domain exception propagated to API handlers."""

    status_code: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR
    error_code: str = "LEDGER-STORE-ERROR"

    def __init__(self, message: str, *, details: Dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_detail(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class StoreUnavailableError(StoreError):
    """The hosted store could not be reached or rejected the request."""

    status_code = HTTPStatus.SERVICE_UNAVAILABLE
    error_code = "LEDGER-STORE-UNAVAILABLE"


class EntryValidationError(StoreError):
    """A draft was rejected before any request was sent to the store."""

    status_code = HTTPStatus.UNPROCESSABLE_ENTITY
    error_code = "LEDGER-INVALID-ENTRY"

    def __init__(self, fields: Dict[str, str]) -> None:
        names = ", ".join(sorted(fields))
        super().__init__(f"Invalid entry fields: {names}", details={"fields": fields})
        self.fields = dict(fields)


class EntryNotFoundError(StoreError):
    status_code = HTTPStatus.NOT_FOUND
    error_code = "LEDGER-NOT-FOUND"

    def __init__(self, entry_id: object) -> None:
        super().__init__(
            f"Entry '{entry_id}' not found", details={"entry_id": entry_id}
        )
        self.entry_id = entry_id
