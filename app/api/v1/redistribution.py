import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_reservation_engine, get_today
from app.core.exceptions import InventoryLedgerError
from app.models.outflow import Channel
from app.schemas.item import RedistributionSuggestion
from app.schemas.outflow import RedistributionHistoryRow, RedistributionRequest, reservation_response
from app.schemas.response import SuccessResponse
from app.services.item_service import redistribution_suggestions, supplier_names
from app.services.ledger_service import list_redistributions
from app.services.reservation_service import ReservationEngine

router = APIRouter()
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
log = logging.getLogger("uvicorn")


@router.get("", response_model=SuccessResponse)
async def suggestions_endpoint(today: date = Depends(get_today)):
    """
    Items worth sending on: more than 10 units left and expiring within the
    next week (but not today).
    """
    items = await redistribution_suggestions(today)
    names = await supplier_names(item.supplier_id for item in items)
    data = [
        RedistributionSuggestion.from_item(item, names.get(item.supplier_id), today).model_dump()
        for item in items
    ]
    return SuccessResponse(data=data)


@router.post("/send", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def send_redistribution_endpoint(
    request_data: RedistributionRequest,
    engine: ReservationEngine = Depends(get_reservation_engine),
):
    try:
        reservation = await engine.reserve(
            request_data.item_id,
            request_data.quantity,
            Channel.REDISTRIBUTION,
            {"destination": request_data.destination, "date_sent": request_data.date_sent},
        )
    except InventoryLedgerError:
        raise
    except Exception as e:
        log.error(f"Error recording redistribution: {e}")
        raise HTTPException(status_code=500, detail="Failed to record redistribution")
    return SuccessResponse(data=reservation_response(reservation, "Redistribution recorded successfully"))


@router.get("/history", response_model=SuccessResponse)
async def redistribution_history_endpoint():
    rows = await list_redistributions()
    return SuccessResponse(data=[RedistributionHistoryRow(**row).model_dump() for row in rows])
