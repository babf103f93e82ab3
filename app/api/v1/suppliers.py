from fastapi import APIRouter

from app.schemas.item import SupplierResponse
from app.schemas.response import SuccessResponse
from app.services.item_service import list_suppliers

router = APIRouter()


@router.get("", response_model=SuccessResponse)
async def list_suppliers_endpoint():
    """Supplier directory, alphabetical. Read-only."""
    suppliers = await list_suppliers()
    data = [
        SupplierResponse(id=s.id, name=s.name, contact_email=s.contact_email, phone=s.phone).model_dump()
        for s in suppliers
    ]
    return SuccessResponse(data=data)
