from datetime import date, timedelta
from types import SimpleNamespace

import pytest

from app.services.expiry_classifier import (
    Freshness,
    classify,
    days_until_expiry,
    is_expiring_alert,
    is_redistribution_candidate,
    suggested_redistribution_quantity,
)

TODAY = date(2024, 6, 10)


def _item(quantity, days):
    return SimpleNamespace(quantity=quantity, expiry_date=TODAY + timedelta(days=days))


@pytest.mark.parametrize("expiry, expected", [
    (date(2024, 6, 9), Freshness.EXPIRED),
    (date(2024, 6, 10), Freshness.EXPIRING_SOON),
    (date(2024, 6, 13), Freshness.EXPIRING_SOON),
    (date(2024, 6, 14), Freshness.FRESH),
    (date(2025, 1, 1), Freshness.FRESH),
])
def test_classify_boundaries(expiry, expected):
    assert classify(expiry, TODAY) == expected


def test_days_until_expiry():
    assert days_until_expiry(date(2024, 6, 13), TODAY) == 3
    assert days_until_expiry(date(2024, 6, 8), TODAY) == -2


def test_expiring_alert_needs_stock():
    assert is_expiring_alert(_item(5, 1), TODAY)
    assert not is_expiring_alert(_item(0, 1), TODAY)
    assert not is_expiring_alert(_item(5, -1), TODAY)
    assert not is_expiring_alert(_item(5, 4), TODAY)


class TestRedistributionEligibility:
    def test_eleven_units_at_end_of_window(self):
        assert is_redistribution_candidate(_item(11, 7), TODAY)

    def test_ten_units_is_not_enough(self):
        assert not is_redistribution_candidate(_item(10, 7), TODAY)

    def test_outside_window(self):
        assert not is_redistribution_candidate(_item(50, 8), TODAY)

    def test_due_today_is_excluded(self):
        assert not is_redistribution_candidate(_item(50, 0), TODAY)

    def test_already_expired(self):
        assert not is_redistribution_candidate(_item(50, -1), TODAY)

    def test_tomorrow(self):
        assert is_redistribution_candidate(_item(12, 1), TODAY)


@pytest.mark.parametrize("quantity, expected", [(11, 6), (12, 6), (40, 20), (1, 1)])
def test_suggested_quantity_is_half_rounded_up(quantity, expected):
    assert suggested_redistribution_quantity(quantity) == expected
