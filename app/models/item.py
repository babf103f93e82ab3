from enum import Enum
from tortoise import fields, models
import uuid


class Category(str, Enum):
    DAIRY = "Dairy"
    MEAT = "Meat"
    VEGETABLES = "Vegetables"
    FRUITS = "Fruits"
    GRAINS = "Grains"
    BEVERAGES = "Beverages"
    OTHER = "Other"


class Item(models.Model):
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    name = fields.CharField(max_length=255)
    category = fields.CharEnumField(Category)
    # Never negative: only the reservation engine decrements it
    quantity = fields.IntField()
    purchase_date = fields.DateField()
    expiry_date = fields.DateField()
    # Weak reference: the supplier may not exist
    supplier_id = fields.UUIDField(null=True)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "items"
        indexes = [
            ("expiry_date",),            # Default listing order and expiry windows
            ("category",),
            ("supplier_id",),
        ]
