from datetime import date

import pytest

from app.core.exceptions import InsufficientStockError
from app.models.item import Category
from app.models.outflow import Channel, WasteLog, WasteReason
from app.services.analytics_service import (
    dashboard_stats,
    monthly_waste,
    top_wasted,
    waste_cost_by_category,
)
from app.services.item_service import delete_item
from app.services.ledger_service import list_sales, list_waste

TODAY = date(2024, 6, 10)


async def _waste(item, quantity, logged=TODAY, reason=WasteReason.SPOILED):
    await WasteLog.create(item_id=item.id, quantity_wasted=quantity, reason=reason, date_logged=logged)


@pytest.mark.asyncio
async def test_end_to_end_dashboard(engine, make_item):
    a = await make_item(name="A", quantity=20, expires_in=30)
    await make_item(name="B", quantity=7, expires_in=2)
    await make_item(name="C", quantity=0, expires_in=1)

    await engine.reserve(a.id, 5, Channel.SALE, {"sale_date": TODAY})
    with pytest.raises(InsufficientStockError):
        await engine.reserve(a.id, 20, Channel.WASTE, {"reason": "Expired", "date_logged": TODAY})

    stats = await dashboard_stats(TODAY)

    assert stats == {
        "total_items": 15 + 7,
        "expiring_count": 1,
        "total_sales": 5,
        "total_waste": 0,
        "total_redistributed": 0,
    }


@pytest.mark.asyncio
async def test_empty_store(db):
    assert await dashboard_stats(TODAY) == {
        "total_items": 0,
        "expiring_count": 0,
        "total_sales": 0,
        "total_waste": 0,
        "total_redistributed": 0,
    }
    assert await monthly_waste() == []
    assert await top_wasted() == []
    assert await waste_cost_by_category() == []


@pytest.mark.asyncio
async def test_monthly_waste_keeps_latest_twelve_months(make_item):
    item = await make_item()
    for month in range(1, 13):
        await _waste(item, month, logged=date(2023, month, 15))
    await _waste(item, 4, logged=date(2024, 1, 2))
    await _waste(item, 6, logged=date(2024, 1, 28))

    rows = await monthly_waste()

    assert len(rows) == 12
    assert rows[0] == {"month": "2024-01", "total_waste": 10}
    assert rows[-1] == {"month": "2023-02", "total_waste": 2}


@pytest.mark.asyncio
async def test_top_wasted_and_cost(make_item):
    milk = await make_item(name="Milk", category=Category.DAIRY)
    beef = await make_item(name="Beef", category=Category.MEAT)
    apples = await make_item(name="Apples", category=Category.FRUITS)
    gone = await make_item(name="Gone", category=Category.MEAT)
    extras = [await make_item(name=f"Extra {i}", category=Category.OTHER) for i in range(3)]

    await _waste(milk, 3)
    await _waste(milk, 4)
    await _waste(beef, 9)
    await _waste(apples, 2)
    await _waste(gone, 50)
    for extra in extras:
        await _waste(extra, 1)
    await delete_item(gone.id)

    top = await top_wasted()

    assert [row["item_name"] for row in top] == ["Beef", "Milk", "Apples", "Extra 0", "Extra 1"]
    assert top[0]["total_wasted"] == 9
    assert top[1] == {"item_id": milk.id, "item_name": "Milk", "total_wasted": 7}

    cost = await waste_cost_by_category()
    assert cost == [
        {"category": "Meat", "estimated_cost": 45},
        {"category": "Dairy", "estimated_cost": 35},
        {"category": "Other", "estimated_cost": 15},
        {"category": "Fruits", "estimated_cost": 10},
    ]


@pytest.mark.asyncio
async def test_history_survives_deleted_items(engine, make_item):
    item = await make_item(name="Yogurt", quantity=10)
    await engine.reserve(item.id, 2, Channel.SALE, {"sale_date": date(2024, 6, 1)})
    await engine.reserve(item.id, 3, Channel.SALE, {"sale_date": date(2024, 6, 5)})
    await engine.reserve(item.id, 1, Channel.WASTE, {"reason": "Damaged", "date_logged": TODAY})

    await delete_item(item.id)

    sales = await list_sales()
    assert [row["quantity_sold"] for row in sales] == [3, 2]
    assert all(row["item_name"] is None and row["category"] is None for row in sales)
    waste = await list_waste()
    assert waste[0]["reason"] == WasteReason.DAMAGED
    assert await dashboard_stats(TODAY) == {
        "total_items": 0,
        "expiring_count": 0,
        "total_sales": 5,
        "total_waste": 1,
        "total_redistributed": 0,
    }


@pytest.mark.asyncio
async def test_reads_are_repeatable(engine, make_item):
    item = await make_item(quantity=30, expires_in=2)
    await engine.reserve(item.id, 4, Channel.WASTE, {"reason": "Overripe", "date_logged": TODAY})

    first = (await dashboard_stats(TODAY), await monthly_waste(), await top_wasted(), await waste_cost_by_category())
    second = (await dashboard_stats(TODAY), await monthly_waste(), await top_wasted(), await waste_cost_by_category())

    assert first == second
