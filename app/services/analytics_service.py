"""
Read-only rollups over the item store and the outflow ledger.

Nothing here is cached: every call aggregates the committed state at read
time, so two calls with no mutation in between return the same result.
"""
import functools
import logging
from collections import Counter
from datetime import date
from typing import Any, Dict, List

from tortoise.exceptions import BaseORMException

from app.core.exceptions import StorageFailureError
from app.models.item import Item
from app.models.outflow import Redistribution, Sale, WasteLog
from app.services.expiry_classifier import is_expiring_alert
from app.services.ledger_service import item_lookup

log = logging.getLogger("reporting")

ESTIMATED_UNIT_COST = 5  # flat per-unit estimate, not a real price
MONTHLY_WASTE_MONTHS = 12
TOP_WASTED_LIMIT = 5


def _storage_guard(name: str):
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except BaseORMException as e:
                log.exception(f"Storage failure computing {name}")
                raise StorageFailureError(f"Failed to fetch {name}") from e
        return wrapper
    return decorator


@_storage_guard("dashboard stats")
async def dashboard_stats(today: date) -> Dict[str, int]:
    items = await Item.all()
    sold = await Sale.all().values_list("quantity_sold", flat=True)
    wasted = await WasteLog.all().values_list("quantity_wasted", flat=True)
    redistributed = await Redistribution.all().values_list("quantity", flat=True)
    return {
        "total_items": sum(item.quantity for item in items),
        "expiring_count": sum(1 for item in items if is_expiring_alert(item, today)),
        "total_sales": sum(sold),
        "total_waste": sum(wasted),
        "total_redistributed": sum(redistributed),
    }


@_storage_guard("monthly waste")
async def monthly_waste() -> List[Dict[str, Any]]:
    """Waste per calendar month, most recent first, at most twelve months."""
    totals: Counter = Counter()
    for date_logged, quantity in await WasteLog.all().values_list("date_logged", "quantity_wasted"):
        totals[date_logged.strftime("%Y-%m")] += quantity
    months = sorted(totals, reverse=True)[:MONTHLY_WASTE_MONTHS]
    return [{"month": month, "total_waste": totals[month]} for month in months]


async def _waste_by_item() -> Counter:
    totals: Counter = Counter()
    for item_id, quantity in await WasteLog.all().values_list("item_id", "quantity_wasted"):
        totals[item_id] += quantity
    return totals


@_storage_guard("top wasted items")
async def top_wasted(limit: int = TOP_WASTED_LIMIT) -> List[Dict[str, Any]]:
    totals = await _waste_by_item()
    items = await item_lookup(totals)
    # Waste against deleted items has no name to report
    ranked = sorted(
        (item_id for item_id in totals if item_id in items),
        key=lambda item_id: (-totals[item_id], items[item_id].name),
    )
    return [
        {"item_id": item_id, "item_name": items[item_id].name, "total_wasted": totals[item_id]}
        for item_id in ranked[:limit]
    ]


@_storage_guard("waste cost")
async def waste_cost_by_category() -> List[Dict[str, Any]]:
    totals = await _waste_by_item()
    items = await item_lookup(totals)
    by_category: Counter = Counter()
    for item_id, quantity in totals.items():
        item = items.get(item_id)
        if item:
            by_category[item.category.value] += quantity
    return [
        {"category": category, "estimated_cost": quantity * ESTIMATED_UNIT_COST}
        for category, quantity in sorted(by_category.items(), key=lambda kv: (-kv[1], kv[0]))
    ]
