import uuid
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.item import Category
from app.models.outflow import Destination, WasteReason


class SaleRequest(BaseModel):
    item_id: uuid.UUID
    quantity_sold: int = Field(..., gt=0)
    sale_date: date = Field(default_factory=date.today)


class WasteRequest(BaseModel):
    item_id: uuid.UUID
    quantity_wasted: int = Field(..., gt=0)
    reason: WasteReason
    date_logged: date = Field(default_factory=date.today)


class RedistributionRequest(BaseModel):
    item_id: uuid.UUID
    quantity: int = Field(..., gt=0)
    destination: Destination
    date_sent: date = Field(default_factory=date.today)


class SaleRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    item_id: uuid.UUID
    quantity_sold: int
    sale_date: date


class WasteRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    item_id: uuid.UUID
    quantity_wasted: int
    reason: WasteReason
    date_logged: date


class RedistributionRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    item_id: uuid.UUID
    quantity: int
    destination: Destination
    date_sent: date


class ReservationResponse(BaseModel):
    """Returned for every successful outflow (201 Created)."""
    message: str
    channel: str
    record: dict
    remaining_quantity: int


# History rows carry the item's name and category; both are null once the item is deleted

class SaleHistoryRow(SaleRecord):
    item_name: Optional[str] = None
    category: Optional[Category] = None


class WasteHistoryRow(WasteRecord):
    item_name: Optional[str] = None
    category: Optional[Category] = None


class RedistributionHistoryRow(RedistributionRecord):
    item_name: Optional[str] = None
    category: Optional[Category] = None


RECORD_SCHEMAS = {
    "sale": SaleRecord,
    "waste": WasteRecord,
    "redistribution": RedistributionRecord,
}


def reservation_response(reservation, message: str) -> dict:
    channel = reservation.channel.value
    record = RECORD_SCHEMAS[channel].model_validate(reservation.record)
    return ReservationResponse(
        message=message,
        channel=channel,
        record=record.model_dump(),
        remaining_quantity=reservation.remaining_quantity,
    ).model_dump()
