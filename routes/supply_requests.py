"""
Supply request API routes (new supply wizard).

Wizard state travels with each request; nothing is stored here until the
batch is submitted to the restaurant backend.
"""

from typing import Any

from fastapi import APIRouter, Depends, File, UploadFile

import structlog

from config.settings import Settings, get_settings
from exceptions import UploadTooLargeError
from models.supply_request import (
    ApplyVendorRequest,
    LineItemsRequest,
    ReconcileResponse,
    SupplyImportResponse,
    SupplyReviewResponse,
    SupplySubmissionResponse,
)
from routes.common import Subdomain, get_supply_request_service, handle_error
from services.supply_request_service import SupplyRequestService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/{subdomain}/supply-requests", tags=["Supply Requests"])


# ===================
# WIZARD ROUTES
# ===================


@router.post("/reconcile", response_model=ReconcileResponse)
async def reconcile_line_items(
    subdomain: Subdomain,
    data: LineItemsRequest,
    service: SupplyRequestService = Depends(get_supply_request_service),
):
    """
    Merge duplicate products (same name, container unit and base unit).

    Quantities are summed and the highest unit price is kept.
    """
    try:
        return service.reconcile_items(data.items)

    except Exception as e:
        return handle_error(e)


@router.post("/import", response_model=SupplyImportResponse)
async def import_supply_csv(
    subdomain: Subdomain,
    file: UploadFile = File(..., description="Bulk supply CSV"),
    service: SupplyRequestService = Depends(get_supply_request_service),
    settings: Settings = Depends(get_settings),
):
    """
    Import line items from a CSV upload.

    Raises:
        413: File too large
        422: CSV unreadable or no row with a product name
    """
    try:
        content = await file.read()
        if len(content) > settings.csv_max_upload_bytes:
            raise UploadTooLargeError(len(content), settings.csv_max_upload_bytes)

        logger.info("supply_csv_uploaded", subdomain=subdomain, filename=file.filename, size=len(content))
        return service.import_csv(content)

    except Exception as e:
        return handle_error(e)


@router.post("/review", response_model=SupplyReviewResponse)
async def review_supply_request(
    subdomain: Subdomain,
    data: LineItemsRequest,
    service: SupplyRequestService = Depends(get_supply_request_service),
):
    """
    Validate the edit step and return the batch for review.

    Raises:
        422: No item with a product name and quantity
    """
    try:
        return service.review(data.items)

    except Exception as e:
        return handle_error(e)


@router.post("/apply-vendor", response_model=LineItemsRequest)
async def apply_vendor_to_all(
    subdomain: Subdomain,
    data: ApplyVendorRequest,
    service: SupplyRequestService = Depends(get_supply_request_service),
):
    """Assign one vendor to every line item."""
    try:
        return LineItemsRequest(items=service.apply_vendor(data.items, data.vendor_id))

    except Exception as e:
        return handle_error(e)


# ===================
# SUBMIT / READ ROUTES
# ===================


@router.post("", response_model=SupplySubmissionResponse, status_code=201)
async def submit_supply_request(
    subdomain: Subdomain,
    data: LineItemsRequest,
    service: SupplyRequestService = Depends(get_supply_request_service),
):
    """
    Submit the batch to the restaurant backend.

    Raises:
        422: Nothing complete to submit, or vendors missing
        503: Backend rejected the batch
    """
    try:
        return service.submit(subdomain, data.items)

    except Exception as e:
        return handle_error(e)


@router.get("", response_model=Any)
async def list_supply_requests(
    subdomain: Subdomain,
    service: SupplyRequestService = Depends(get_supply_request_service),
):
    """List submitted supply requests."""
    try:
        return service.list_requests(subdomain)

    except Exception as e:
        return handle_error(e)


@router.get("/{request_id}", response_model=Any)
async def get_supply_request(
    subdomain: Subdomain,
    request_id: str,
    service: SupplyRequestService = Depends(get_supply_request_service),
):
    """
    Get one submitted supply request.

    Raises:
        404: Request not found
    """
    try:
        return service.get_request(subdomain, request_id)

    except Exception as e:
        return handle_error(e)
