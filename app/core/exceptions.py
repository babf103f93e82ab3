"""
Typed errors raised by the inventory ledger.

Every error carries a machine-readable ``code`` and the HTTP status it maps
to, so the API layer never has to parse messages.

    InventoryLedgerError
    +-- ValidationError        400
    +-- ItemNotFoundError      404
    +-- InsufficientStockError 400
    +-- BusyError              503
    +-- StorageFailureError    500
"""
from typing import Any


class InventoryLedgerError(Exception):
    code = "ledger_error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(InventoryLedgerError):
    """A required field is missing or malformed. Raised before storage is touched."""
    code = "validation_error"
    status_code = 400


class ItemNotFoundError(InventoryLedgerError):
    code = "item_not_found"
    status_code = 404

    def __init__(self, item_id: Any):
        super().__init__(f"Item {item_id} not found")
        self.item_id = item_id


class InsufficientStockError(InventoryLedgerError):
    code = "insufficient_stock"
    status_code = 400

    def __init__(self, item_id: Any, requested: int, available: int):
        super().__init__(
            f"Insufficient quantity available for item {item_id}. "
            f"Requested: {requested}, Available: {available}"
        )
        self.item_id = item_id
        self.requested = requested
        self.available = available


class BusyError(InventoryLedgerError):
    """The item's lock could not be acquired in time. Safe to retry with backoff."""
    code = "busy"
    status_code = 503

    def __init__(self, item_id: Any):
        super().__init__(f"Item {item_id} is busy, retry later")
        self.item_id = item_id


class StorageFailureError(InventoryLedgerError):
    code = "storage_failure"
    status_code = 500

    def __init__(self, message: str = "Storage operation failed"):
        super().__init__(message)
