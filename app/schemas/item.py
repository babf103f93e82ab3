import uuid
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.item import Category, Item
from app.services.expiry_classifier import Freshness, classify, days_until_expiry, suggested_redistribution_quantity


class ItemRequest(BaseModel):
    """Schema for adding or fully replacing an item."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255, description="Name of the item (e.g., Whole Milk).")
    category: Category
    quantity: int = Field(..., ge=0, description="Units on hand.")
    purchase_date: date
    expiry_date: date
    supplier_id: Optional[uuid.UUID] = Field(None, description="Supplier reference; not required to exist.")


class ItemCreatedResponse(BaseModel):
    item_id: uuid.UUID
    message: str


class ItemResponse(BaseModel):
    id: uuid.UUID
    name: str
    category: Category
    quantity: int
    purchase_date: date
    expiry_date: date
    supplier_id: Optional[uuid.UUID]
    supplier_name: Optional[str]
    freshness: Freshness
    days_until_expiry: int

    @classmethod
    def from_item(cls, item: Item, supplier_name: Optional[str], today: date) -> "ItemResponse":
        return cls(
            id=item.id,
            name=item.name,
            category=item.category,
            quantity=item.quantity,
            purchase_date=item.purchase_date,
            expiry_date=item.expiry_date,
            supplier_id=item.supplier_id,
            supplier_name=supplier_name,
            freshness=classify(item.expiry_date, today),
            days_until_expiry=days_until_expiry(item.expiry_date, today),
        )


class RedistributionSuggestion(ItemResponse):
    suggested_quantity: int

    @classmethod
    def from_item(cls, item: Item, supplier_name: Optional[str], today: date) -> "RedistributionSuggestion":
        base = ItemResponse.from_item(item, supplier_name, today)
        return cls(**base.model_dump(), suggested_quantity=suggested_redistribution_quantity(item.quantity))


class SupplierResponse(BaseModel):
    id: uuid.UUID
    name: str
    contact_email: Optional[str] = None
    phone: Optional[str] = None
