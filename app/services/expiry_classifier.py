"""
Freshness rules for perishable stock.

Every expiry-based decision (alert lists, dashboard counts, redistribution
suggestions) goes through this module so the thresholds stay in one place.
Pure functions only: callers pass in "today".
"""
import math
from datetime import date, timedelta
from enum import Enum
from typing import Any

EXPIRING_SOON_DAYS = 3
REDISTRIBUTION_WINDOW_DAYS = 7
REDISTRIBUTION_MIN_QUANTITY = 10  # strictly more than this many units
REDISTRIBUTION_SHARE = 0.5


class Freshness(str, Enum):
    EXPIRED = "expired"
    EXPIRING_SOON = "expiring_soon"
    FRESH = "fresh"


def days_until_expiry(expiry_date: date, today: date) -> int:
    return (expiry_date - today).days


def classify(expiry_date: date, today: date) -> Freshness:
    """Expired before today, expiring soon from today through today+3, fresh after."""
    if expiry_date < today:
        return Freshness.EXPIRED
    if expiry_date <= today + timedelta(days=EXPIRING_SOON_DAYS):
        return Freshness.EXPIRING_SOON
    return Freshness.FRESH


def is_expiring_alert(item: Any, today: date) -> bool:
    """Items worth alerting on: expiring soon and still in stock."""
    return item.quantity > 0 and classify(item.expiry_date, today) == Freshness.EXPIRING_SOON


def is_redistribution_candidate(item: Any, today: date) -> bool:
    # Items due today are excluded: they are already past saving
    if item.quantity <= REDISTRIBUTION_MIN_QUANTITY:
        return False
    return today < item.expiry_date <= today + timedelta(days=REDISTRIBUTION_WINDOW_DAYS)


def suggested_redistribution_quantity(quantity: int) -> int:
    return min(quantity, math.ceil(quantity * REDISTRIBUTION_SHARE))
