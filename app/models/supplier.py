from tortoise import fields, models
import uuid


class Supplier(models.Model):
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    name = fields.CharField(max_length=255)
    contact_email = fields.CharField(max_length=255, null=True)
    phone = fields.CharField(max_length=64, null=True)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "suppliers"
