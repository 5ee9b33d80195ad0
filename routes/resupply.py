"""
Resupply API routes.

Re-orders products already in inventory by inventory id and quantity.
"""

from fastapi import APIRouter, Depends

from models.resupply import ResupplyRequest, ResupplySubmissionResponse
from routes.common import Subdomain, get_resupply_service, handle_error
from services.resupply_service import ResupplyService

router = APIRouter(prefix="/api/{subdomain}/resupply", tags=["Resupply"])


@router.post("", response_model=ResupplySubmissionResponse, status_code=201)
async def submit_resupply(
    subdomain: Subdomain,
    data: ResupplyRequest,
    service: ResupplyService = Depends(get_resupply_service),
):
    """
    Submit a resupply batch.

    Rows for the same product and units are merged before submission.

    Raises:
        404: Unknown inventory id
        422: No row with an inventory id and positive quantity
        503: Backend rejected the batch
    """
    try:
        return service.submit(subdomain, data.items)

    except Exception as e:
        return handle_error(e)
