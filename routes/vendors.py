"""
Vendor API routes.
"""

from fastapi import APIRouter, Depends

from models.supply_request import Vendor
from routes.common import get_supply_request_service, handle_error
from services.supply_request_service import SupplyRequestService

router = APIRouter(prefix="/api/vendors", tags=["Vendors"])


@router.get("", response_model=list[Vendor])
async def list_vendors(
    service: SupplyRequestService = Depends(get_supply_request_service),
):
    """Vendors for the supply wizard's vendor picker."""
    try:
        return service.list_vendors()

    except Exception as e:
        return handle_error(e)
