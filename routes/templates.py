"""
Supply request template API routes (template-apply wizard).
"""

from fastapi import APIRouter, Depends

from models.supply_request import SupplySubmissionResponse
from models.template import (
    TemplateItemsRequest,
    TemplateItemsResponse,
    TemplateItemUpdateRequest,
    TemplateItemUpdateResponse,
    TemplateListItem,
)
from routes.common import Subdomain, get_template_service, handle_error
from services.template_service import TemplateService

router = APIRouter(prefix="/api/{subdomain}/supply-templates", tags=["Supply Templates"])


# ===================
# LIST ROUTES
# ===================


@router.get("", response_model=list[TemplateListItem])
async def list_templates(
    subdomain: Subdomain,
    service: TemplateService = Depends(get_template_service),
):
    """List saved templates with their item counts."""
    try:
        return service.list_template_cards(subdomain)

    except Exception as e:
        return handle_error(e)


@router.get("/{template_id}/items", response_model=TemplateItemsResponse)
async def get_template_items(
    subdomain: Subdomain,
    template_id: str,
    service: TemplateService = Depends(get_template_service),
):
    """
    Load a template into wizard state.

    Duplicate supplies in the stored template are merged.

    Raises:
        404: Template not found
    """
    try:
        return service.load_template_items(subdomain, template_id)

    except Exception as e:
        return handle_error(e)


# ===================
# EDIT ROUTES
# ===================


@router.post("/{template_id}/items", response_model=TemplateItemsRequest)
async def add_template_item(
    subdomain: Subdomain,
    template_id: str,
    data: TemplateItemsRequest,
    service: TemplateService = Depends(get_template_service),
):
    """Append a blank row to the wizard state."""
    try:
        return TemplateItemsRequest(items=service.add_item(data.items))

    except Exception as e:
        return handle_error(e)


@router.put("/{template_id}/items/{index}", response_model=TemplateItemUpdateResponse)
async def update_template_item(
    subdomain: Subdomain,
    template_id: str,
    index: int,
    data: TemplateItemUpdateRequest,
    service: TemplateService = Depends(get_template_service),
):
    """
    Replace one row.

    If the edited row now matches another row's product and units, it is
    merged into that row instead.

    Raises:
        422: Index out of range
    """
    try:
        return service.update_item(data.items, index, data.item)

    except Exception as e:
        return handle_error(e)


# ===================
# SUBMIT ROUTES
# ===================


@router.post("/{template_id}/apply", response_model=SupplySubmissionResponse, status_code=201)
async def apply_template(
    subdomain: Subdomain,
    template_id: str,
    data: TemplateItemsRequest,
    service: TemplateService = Depends(get_template_service),
):
    """
    Submit the edited template as a new supply batch.

    Incomplete rows are excluded and reported.

    Raises:
        422: No complete row
        503: Backend rejected the batch
    """
    try:
        return service.apply_template(subdomain, template_id, data.items)

    except Exception as e:
        return handle_error(e)
