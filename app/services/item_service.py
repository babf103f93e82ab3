import logging
import uuid
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from tortoise.exceptions import BaseORMException
from tortoise.transactions import in_transaction

from app.core.exceptions import ItemNotFoundError, StorageFailureError, ValidationError
from app.models.item import Category, Item
from app.models.supplier import Supplier
from app.services.expiry_classifier import is_expiring_alert, is_redistribution_candidate

log = logging.getLogger("item_store")

ITEM_FIELDS = ("name", "category", "quantity", "purchase_date", "expiry_date", "supplier_id")


def _clean_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Validates the full set of mutable item fields (create and update both replace all of them)."""
    missing = [name for name in ITEM_FIELDS[:-1] if fields.get(name) is None]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")

    name = str(fields["name"]).strip()
    if not name:
        raise ValidationError("Item name must not be empty")

    try:
        category = Category(fields["category"])
    except ValueError:
        raise ValidationError(f"Invalid category {fields['category']!r}") from None

    quantity = fields["quantity"]
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
        raise ValidationError(f"Quantity must be a non-negative integer, got {quantity!r}")

    for key in ("purchase_date", "expiry_date"):
        if not isinstance(fields[key], date):
            raise ValidationError(f"Field {key} must be a date")

    supplier_id = fields.get("supplier_id")
    if supplier_id is not None and not isinstance(supplier_id, uuid.UUID):
        try:
            supplier_id = uuid.UUID(str(supplier_id))
        except ValueError:
            raise ValidationError(f"Invalid supplier id: {supplier_id!r}") from None

    return {
        "name": name,
        "category": category,
        "quantity": quantity,
        "purchase_date": fields["purchase_date"],
        "expiry_date": fields["expiry_date"],
        "supplier_id": supplier_id,
    }


async def create_item(fields: Dict[str, Any]) -> Item:
    """Inventory intake. Quantity is stored as supplied, no reservation involved."""
    values = _clean_fields(fields)
    try:
        item = await Item.create(**values)
    except BaseORMException as e:
        log.exception("Storage failure creating item")
        raise StorageFailureError("Failed to add item") from e
    log.info(f"Item {item.id} ({item.name}) added with quantity {item.quantity}.")
    return item


async def get_item(item_id: uuid.UUID) -> Item:
    try:
        item = await Item.get_or_none(id=item_id)
    except BaseORMException as e:
        raise StorageFailureError("Failed to fetch item") from e
    if not item:
        raise ItemNotFoundError(item_id)
    return item


async def update_item(item_id: uuid.UUID, fields: Dict[str, Any]) -> Item:
    """
    Administrative full replace of an item's fields, quantity included.
    The row lock keeps it from interleaving with an in-flight reservation.
    """
    values = _clean_fields(fields)
    try:
        async with in_transaction() as conn:
            item = await Item.filter(id=item_id).using_db(conn).select_for_update().first()
            if not item:
                raise ItemNotFoundError(item_id)
            old_quantity = item.quantity
            for key, value in values.items():
                setattr(item, key, value)
            await item.save(using_db=conn)
    except BaseORMException as e:
        log.exception(f"Storage failure updating item {item_id}")
        raise StorageFailureError("Failed to update item") from e

    if old_quantity != item.quantity:
        log.info(f"Item {item_id} quantity set from {old_quantity} to {item.quantity} by operator.")
    return item


async def delete_item(item_id: uuid.UUID) -> None:
    """Deletes the item. Ledger records keep their (now dangling) item_id."""
    try:
        deleted = await Item.filter(id=item_id).delete()
    except BaseORMException as e:
        log.exception(f"Storage failure deleting item {item_id}")
        raise StorageFailureError("Failed to delete item") from e
    if not deleted:
        raise ItemNotFoundError(item_id)
    log.info(f"Item {item_id} deleted.")


async def list_items() -> List[Item]:
    try:
        return await Item.all().order_by("expiry_date", "name")
    except BaseORMException as e:
        raise StorageFailureError("Failed to fetch items") from e


async def list_expiring_items(today: date) -> List[Item]:
    """In-stock items whose freshness is 'expiring soon'."""
    items = await list_items()
    return [item for item in items if is_expiring_alert(item, today)]


async def redistribution_suggestions(today: date) -> List[Item]:
    items = await list_items()
    return [item for item in items if is_redistribution_candidate(item, today)]


async def list_suppliers() -> List[Supplier]:
    try:
        return await Supplier.all().order_by("name")
    except BaseORMException as e:
        raise StorageFailureError("Failed to fetch suppliers") from e


async def supplier_names(supplier_ids: Iterable[Optional[uuid.UUID]]) -> Dict[uuid.UUID, str]:
    """Best-effort lookup. Unknown ids are simply absent from the result."""
    ids = {sid for sid in supplier_ids if sid is not None}
    if not ids:
        return {}
    try:
        suppliers = await Supplier.filter(id__in=ids)
    except BaseORMException as e:
        raise StorageFailureError("Failed to fetch suppliers") from e
    return {supplier.id: supplier.name for supplier in suppliers}
