from datetime import date

from fastapi import APIRouter, Depends

from app.api.deps import get_today
from app.schemas.analytics import DashboardStats, MonthlyWaste, TopWastedItem, WasteCost
from app.schemas.response import SuccessResponse
from app.services.analytics_service import dashboard_stats, monthly_waste, top_wasted, waste_cost_by_category

router = APIRouter()


@router.get("/dashboard-stats", response_model=SuccessResponse)
async def dashboard_stats_endpoint(today: date = Depends(get_today)):
    stats = await dashboard_stats(today)
    return SuccessResponse(data=DashboardStats(**stats).model_dump())


@router.get("/monthly-waste", response_model=SuccessResponse)
async def monthly_waste_endpoint():
    rows = await monthly_waste()
    return SuccessResponse(data=[MonthlyWaste(**row).model_dump() for row in rows])


@router.get("/top-wasted", response_model=SuccessResponse)
async def top_wasted_endpoint():
    rows = await top_wasted()
    return SuccessResponse(data=[TopWastedItem(**row).model_dump() for row in rows])


@router.get("/waste-cost", response_model=SuccessResponse)
async def waste_cost_endpoint():
    """Estimated cost of waste per category (flat 5 per unit)."""
    rows = await waste_cost_by_category()
    return SuccessResponse(data=[WasteCost(**row).model_dump() for row in rows])
