from enum import Enum
from tortoise import fields, models
import uuid


class Channel(str, Enum):
    SALE = "sale"
    WASTE = "waste"
    REDISTRIBUTION = "redistribution"


class WasteReason(str, Enum):
    EXPIRED = "Expired"
    SPOILED = "Spoiled"
    DAMAGED = "Damaged"
    OVERRIPE = "Overripe"
    CONTAMINATED = "Contaminated"
    CUSTOMER_RETURN = "Customer Return"
    OTHER = "Other"


class Destination(str, Enum):
    LOCAL_FOOD_BANK = "Local Food Bank"
    COMMUNITY_KITCHEN = "Community Kitchen"
    ANIMAL_SHELTER = "Animal Shelter"
    COMPOSTING_FACILITY = "Composting Facility"
    CHARITY_ORGANIZATION = "Charity Organization"
    STAFF_DISTRIBUTION = "Staff Distribution"
    OTHER = "Other"


# Outflow records are append-only. item_id is a plain column rather than a
# foreign key so records survive deletion of the item they reference.

class Sale(models.Model):
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    item_id = fields.UUIDField()
    quantity_sold = fields.IntField()
    sale_date = fields.DateField()
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "sales"
        indexes = [
            ("item_id",),
            ("sale_date",),
        ]


class WasteLog(models.Model):
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    item_id = fields.UUIDField()
    quantity_wasted = fields.IntField()
    reason = fields.CharEnumField(WasteReason)
    date_logged = fields.DateField()
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "waste_log"
        indexes = [
            ("item_id",),
            ("date_logged",),
        ]


class Redistribution(models.Model):
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    item_id = fields.UUIDField()
    quantity = fields.IntField()
    destination = fields.CharEnumField(Destination)
    date_sent = fields.DateField()
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "redistribution"
        indexes = [
            ("item_id",),
            ("date_sent",),
        ]
