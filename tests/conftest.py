import pytest
from datetime import date, timedelta
from httpx import ASGITransport, AsyncClient

from app.api.deps import get_reservation_engine, get_today
from app.core.db import init_db, close_db
from app.main import app
from app.models.item import Category, Item
from app.services.reservation_service import ReservationEngine

TODAY = date(2024, 6, 10)


@pytest.fixture
async def db():
    """Fresh in-memory database per test."""
    await init_db("sqlite://:memory:", generate_schemas=True)
    yield
    await close_db()


@pytest.fixture
def engine():
    return ReservationEngine(lock_timeout=1.0)


@pytest.fixture
def make_item(db):
    """Factory: creates an item expiring `expires_in` days after TODAY."""
    async def _make(name="Whole Milk", quantity=20, expires_in=10, category=Category.DAIRY, supplier_id=None):
        return await Item.create(
            name=name,
            category=category,
            quantity=quantity,
            purchase_date=TODAY - timedelta(days=2),
            expiry_date=TODAY + timedelta(days=expires_in),
            supplier_id=supplier_id,
        )
    return _make


@pytest.fixture
async def client(db, engine):
    app.dependency_overrides[get_reservation_engine] = lambda: engine
    app.dependency_overrides[get_today] = lambda: TODAY
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
