import uuid

from pydantic import BaseModel


class DashboardStats(BaseModel):
    total_items: int
    expiring_count: int
    total_sales: int
    total_waste: int
    total_redistributed: int


class MonthlyWaste(BaseModel):
    month: str  # YYYY-MM
    total_waste: int


class TopWastedItem(BaseModel):
    item_id: uuid.UUID
    item_name: str
    total_wasted: int


class WasteCost(BaseModel):
    category: str
    estimated_cost: int
