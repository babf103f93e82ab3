# app/models/__init__.py
from .item import Item, Category
from .supplier import Supplier
from .outflow import Channel, Destination, Redistribution, Sale, WasteLog, WasteReason

# Export all models
__all__ = [
    "Item",
    "Category",
    "Supplier",
    "Channel",
    "Destination",
    "Redistribution",
    "Sale",
    "WasteLog",
    "WasteReason",
]
