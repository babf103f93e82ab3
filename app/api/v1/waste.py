import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_reservation_engine
from app.core.exceptions import InventoryLedgerError
from app.models.outflow import Channel
from app.schemas.outflow import WasteHistoryRow, WasteRequest, reservation_response
from app.schemas.response import SuccessResponse
from app.services.ledger_service import list_waste
from app.services.reservation_service import ReservationEngine

router = APIRouter()
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
log = logging.getLogger("uvicorn")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def log_waste_endpoint(
    request_data: WasteRequest,
    engine: ReservationEngine = Depends(get_reservation_engine),
):
    """Logs wasted units with a reason and removes them from stock."""
    try:
        reservation = await engine.reserve(
            request_data.item_id,
            request_data.quantity_wasted,
            Channel.WASTE,
            {"reason": request_data.reason, "date_logged": request_data.date_logged},
        )
    except InventoryLedgerError:
        raise
    except Exception as e:
        log.error(f"Error logging waste: {e}")
        raise HTTPException(status_code=500, detail="Failed to log waste")
    return SuccessResponse(data=reservation_response(reservation, "Waste logged successfully"))


@router.get("", response_model=SuccessResponse)
async def waste_log_endpoint():
    rows = await list_waste()
    return SuccessResponse(data=[WasteHistoryRow(**row).model_dump() for row in rows])
