from typing import Any, Dict, Iterable, List, Type
from uuid import UUID

from tortoise import models
from tortoise.exceptions import BaseORMException

from app.core.exceptions import StorageFailureError
from app.models.item import Item
from app.models.outflow import Redistribution, Sale, WasteLog


async def item_lookup(item_ids: Iterable[UUID]) -> Dict[UUID, Item]:
    """Resolves item references in one query. Deleted items are absent from the map."""
    ids = set(item_ids)
    if not ids:
        return {}
    items = await Item.filter(id__in=ids)
    return {item.id: item for item in items}


async def _history(model: Type[models.Model], date_field: str, fields: List[str]) -> List[Dict[str, Any]]:
    try:
        records = await model.all().order_by(f"-{date_field}", "-created_at")
        items = await item_lookup(record.item_id for record in records)
    except BaseORMException as e:
        raise StorageFailureError(f"Failed to fetch {model._meta.db_table} history") from e

    rows = []
    for record in records:
        item = items.get(record.item_id)
        row = {name: getattr(record, name) for name in ["id", "item_id", *fields]}
        # Dangling references degrade to nulls
        row["item_name"] = item.name if item else None
        row["category"] = item.category if item else None
        rows.append(row)
    return rows


async def list_sales() -> List[Dict[str, Any]]:
    return await _history(Sale, "sale_date", ["quantity_sold", "sale_date"])


async def list_waste() -> List[Dict[str, Any]]:
    return await _history(WasteLog, "date_logged", ["quantity_wasted", "reason", "date_logged"])


async def list_redistributions() -> List[Dict[str, Any]]:
    return await _history(Redistribution, "date_sent", ["quantity", "destination", "date_sent"])
