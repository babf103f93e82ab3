import logging
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_today
from app.core.exceptions import InventoryLedgerError
from app.schemas.item import ItemCreatedResponse, ItemRequest, ItemResponse
from app.schemas.response import SuccessResponse
from app.services.item_service import (
    create_item,
    delete_item,
    get_item,
    list_expiring_items,
    list_items,
    supplier_names,
    update_item,
)

router = APIRouter()
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
log = logging.getLogger("uvicorn")


async def _item_payloads(items, today: date):
    names = await supplier_names(item.supplier_id for item in items)
    return [ItemResponse.from_item(item, names.get(item.supplier_id), today).model_dump() for item in items]


@router.get("", response_model=SuccessResponse)
async def list_items_endpoint(today: date = Depends(get_today)):
    """All items, soonest expiry first."""
    items = await list_items()
    return SuccessResponse(data=await _item_payloads(items, today))


@router.get("/expiring", response_model=SuccessResponse)
async def list_expiring_items_endpoint(today: date = Depends(get_today)):
    """In-stock items expiring within the next three days (today included)."""
    items = await list_expiring_items(today)
    return SuccessResponse(data=await _item_payloads(items, today))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def create_item_endpoint(item_data: ItemRequest):
    """Inventory intake: adds a new item with its initial quantity."""
    try:
        item = await create_item(item_data.model_dump())
    except InventoryLedgerError:
        raise
    except Exception as e:
        log.error(f"Error adding item: {e}")
        raise HTTPException(status_code=500, detail="Failed to add item")

    data = ItemCreatedResponse(item_id=item.id, message="Item added successfully").model_dump()
    return SuccessResponse(data=data)


@router.get("/{item_id}", response_model=SuccessResponse)
async def get_item_endpoint(item_id: UUID, today: date = Depends(get_today)):
    item = await get_item(item_id)
    payloads = await _item_payloads([item], today)
    return SuccessResponse(data=payloads[0])


@router.put("/{item_id}", response_model=SuccessResponse)
async def update_item_endpoint(item_id: UUID, item_data: ItemRequest, today: date = Depends(get_today)):
    """
    Replaces every field of the item, quantity included. This is an operator
    correction and bypasses reservation checks.
    """
    try:
        item = await update_item(item_id, item_data.model_dump())
    except InventoryLedgerError:
        raise
    except Exception as e:
        log.error(f"Error updating item {item_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update item")

    payloads = await _item_payloads([item], today)
    return SuccessResponse(data={"message": "Item updated successfully", "item": payloads[0]})


@router.delete("/{item_id}", response_model=SuccessResponse)
async def delete_item_endpoint(item_id: UUID):
    try:
        await delete_item(item_id)
    except InventoryLedgerError:
        raise
    except Exception as e:
        log.error(f"Error deleting item {item_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete item")
    return SuccessResponse(data={"message": "Item deleted successfully", "item_id": str(item_id)})
