import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_reservation_engine
from app.core.exceptions import InventoryLedgerError
from app.models.outflow import Channel
from app.schemas.outflow import SaleHistoryRow, SaleRequest, reservation_response
from app.schemas.response import SuccessResponse
from app.services.ledger_service import list_sales
from app.services.reservation_service import ReservationEngine

router = APIRouter()
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
log = logging.getLogger("uvicorn")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def record_sale_endpoint(
    request_data: SaleRequest,
    engine: ReservationEngine = Depends(get_reservation_engine),
):
    """Records a sale and takes the sold units out of stock."""
    try:
        reservation = await engine.reserve(
            request_data.item_id,
            request_data.quantity_sold,
            Channel.SALE,
            {"sale_date": request_data.sale_date},
        )
    except InventoryLedgerError:
        raise
    except Exception as e:
        log.error(f"Error recording sale: {e}")
        raise HTTPException(status_code=500, detail="Failed to record sale")
    return SuccessResponse(data=reservation_response(reservation, "Sale recorded successfully"))


@router.get("", response_model=SuccessResponse)
async def sales_history_endpoint():
    """Sales newest first."""
    rows = await list_sales()
    return SuccessResponse(data=[SaleHistoryRow(**row).model_dump() for row in rows])
