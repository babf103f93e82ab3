# scripts/seed_data.py
import asyncio
from datetime import date, timedelta
from app.core.db import init_db, close_db
from app.models.item import Category, Item
from app.models.supplier import Supplier

async def seed():
    today = date.today()

    # Create suppliers
    dairy, _ = await Supplier.get_or_create(name="Green Valley Dairy", defaults={"contact_email": "orders@greenvalley.example"})
    farm, _ = await Supplier.get_or_create(name="Sunrise Farms", defaults={"phone": "555-0142"})
    print("Suppliers:", str(dairy.id), str(farm.id))

    # (name, category, quantity, days since purchase, days until expiry, supplier)
    stock = [
        ("Whole Milk", Category.DAIRY, 24, 2, 2, dairy),
        ("Greek Yogurt", Category.DAIRY, 15, 5, 6, dairy),
        ("Spinach", Category.VEGETABLES, 12, 1, 3, farm),
        ("Bananas", Category.FRUITS, 40, 3, 5, farm),
        ("Chicken Breast", Category.MEAT, 8, 1, 1, None),
        ("Brown Rice", Category.GRAINS, 30, 10, 180, None),
        ("Orange Juice", Category.BEVERAGES, 18, 4, 12, farm),
    ]

    # Create items; re-running resets quantities (idempotent)
    for name, category, quantity, bought, expires, supplier in stock:
        item, _ = await Item.get_or_create(
            name=name,
            defaults={
                "category": category,
                "quantity": quantity,
                "purchase_date": today - timedelta(days=bought),
                "expiry_date": today + timedelta(days=expires),
                "supplier_id": supplier.id if supplier else None,
            },
        )
        item.quantity = quantity
        await item.save()
        print("Item:", item.name, str(item.id))

    print("Inventory seeded.")

async def main():
    await init_db()
    await seed()
    await close_db()

if __name__ == "__main__":
    asyncio.run(main())
