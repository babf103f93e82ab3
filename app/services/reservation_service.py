import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Type

from tortoise import models
from tortoise.exceptions import BaseORMException
from tortoise.expressions import F
from tortoise.transactions import in_transaction

from app.core.config import RESERVATION_LOCK_TIMEOUT
from app.core.exceptions import (
    InsufficientStockError,
    InventoryLedgerError,
    ItemNotFoundError,
    StorageFailureError,
    ValidationError,
)
from app.core.locks import ItemLockRegistry
from app.models.item import Item
from app.models.outflow import Channel, Destination, Redistribution, Sale, WasteLog, WasteReason

log = logging.getLogger("reservation_engine")


# Per channel: ledger model, the model's quantity column, and the
# required channel fields with the type each is coerced to.
CHANNEL_RULES: Dict[Channel, Tuple[Type[models.Model], str, Dict[str, type]]] = {
    Channel.SALE: (Sale, "quantity_sold", {"sale_date": date}),
    Channel.WASTE: (WasteLog, "quantity_wasted", {"reason": WasteReason, "date_logged": date}),
    Channel.REDISTRIBUTION: (Redistribution, "quantity", {"destination": Destination, "date_sent": date}),
}


@dataclass
class Reservation:
    channel: Channel
    record: models.Model
    remaining_quantity: int


def _coerce_field(name: str, value: Any, kind: type) -> Any:
    if value is None:
        raise ValidationError(f"Missing required field: {name}")
    if kind is date:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            try:
                return date.fromisoformat(value)
            except ValueError:
                pass
        raise ValidationError(f"Field {name} must be an ISO date, got {value!r}")
    if issubclass(kind, Enum):
        try:
            return kind(value)
        except ValueError:
            allowed = ", ".join(member.value for member in kind)
            raise ValidationError(f"Invalid {name} {value!r}. Expected one of: {allowed}") from None
    return value


def _coerce_item_id(item_id: Any) -> uuid.UUID:
    if isinstance(item_id, uuid.UUID):
        return item_id
    try:
        return uuid.UUID(str(item_id))
    except ValueError:
        raise ValidationError(f"Invalid item id: {item_id!r}") from None


def validate_request(
    item_id: Any, quantity: Any, channel: Any, channel_fields: Optional[Dict[str, Any]]
) -> Tuple[uuid.UUID, Channel, Dict[str, Any]]:
    """Checks a reservation request without touching storage."""
    try:
        channel = Channel(channel)
    except ValueError:
        raise ValidationError(f"Unknown outflow channel: {channel!r}") from None

    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValidationError(f"Quantity must be a positive integer, got {quantity!r}")

    _, _, required = CHANNEL_RULES[channel]
    channel_fields = dict(channel_fields or {})
    unknown = set(channel_fields) - set(required)
    if unknown:
        raise ValidationError(f"Unexpected fields for {channel.value}: {', '.join(sorted(unknown))}")

    values = {
        name: _coerce_field(name, channel_fields.get(name), kind)
        for name, kind in required.items()
    }
    return _coerce_item_id(item_id), channel, values


class ReservationEngine:
    """
    The only code path that decrements an item's quantity.

    A reservation holds the item's lock (bounded wait, BusyError on timeout)
    and, inside one transaction, reads the row for update, applies a guarded
    decrement (``quantity >= requested``) and appends the ledger record.
    Either both writes commit or neither does.
    """

    def __init__(self, lock_timeout: float = RESERVATION_LOCK_TIMEOUT, locks: Optional[ItemLockRegistry] = None):
        self.lock_timeout = lock_timeout
        self.locks = locks or ItemLockRegistry()

    async def reserve(
        self,
        item_id: Any,
        quantity: int,
        channel: Channel,
        channel_fields: Optional[Dict[str, Any]] = None,
    ) -> Reservation:
        try:
            item_id, channel, values = validate_request(item_id, quantity, channel, channel_fields)
        except ValidationError as e:
            log.warning(f"Rejected {channel} reservation for item {item_id}: {e.message}")
            raise

        model, quantity_field, _ = CHANNEL_RULES[channel]

        try:
            async with self.locks.hold(item_id, self.lock_timeout):
                async with in_transaction() as conn:
                    item = await Item.filter(id=item_id).using_db(conn).select_for_update().first()
                    if not item:
                        raise ItemNotFoundError(item_id)
                    if item.quantity < quantity:
                        raise InsufficientStockError(item_id, quantity, item.quantity)

                    # Guard clause keeps the decrement safe even without row locks
                    updated = await Item.filter(id=item_id, quantity__gte=quantity).using_db(conn).update(
                        quantity=F("quantity") - quantity
                    )
                    if updated != 1:
                        raise InsufficientStockError(item_id, quantity, item.quantity)

                    record = await model.create(
                        item_id=item_id,
                        **{quantity_field: quantity},
                        **values,
                        using_db=conn,
                    )
        except InventoryLedgerError as e:
            log.warning(f"Rejected {channel.value} reservation for item {item_id}: {e.message}")
            raise
        except BaseORMException as e:
            log.exception(f"Storage failure reserving {quantity} of item {item_id} for {channel.value}")
            raise StorageFailureError("Failed to record outflow") from e

        remaining = item.quantity - quantity
        log.info(f"Reserved {quantity} of item {item_id} for {channel.value}. Remaining: {remaining}")
        return Reservation(channel=channel, record=record, remaining_quantity=remaining)
