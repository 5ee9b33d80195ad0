"""
Template Service: apply a saved supply request template.

Loading a template normalises its stored supplies and folds duplicates
together; edits that collide with another row are merged into that row.
"""

from typing import Any, Optional, Sequence

import structlog

from config.units import (
    DEFAULT_BASE_QUANTITY_PER_UNIT,
    normalize_base_unit,
    normalize_container_unit,
)
from exceptions import EmptySupplyBatchError, LineItemIndexError, TemplateNotFoundError
from integrations.restaurant_backend import RestaurantBackendClient
from models.supply_request import RequestMethod, SupplySubmissionResponse
from models.template import (
    SupplyTemplate,
    TemplateItemsResponse,
    TemplateItemUpdateResponse,
    TemplateListItem,
    TemplateSupplyItem,
)
from services.line_item_reconciler import merge_edited_item, reconcile
from services.supply_request_service import summarize_line_items
from utils.text_utils import pluralize

logger = structlog.get_logger(__name__)


def normalize_template_supply(raw: dict[str, Any], index: int) -> TemplateSupplyItem:
    """
    Turn a stored template supply into wizard state.

    Missing or out-of-range values fall back to form defaults; unknown units
    become crate/piece. Rows without an id get "template-{index}".
    """
    method = raw.get("requestMethod")
    if method not in (RequestMethod.MANUAL.value, RequestMethod.BULK.value):
        method = RequestMethod.MANUAL.value

    base_quantity = _number(raw.get("baseQuantityPerUnit"), DEFAULT_BASE_QUANTITY_PER_UNIT)
    if base_quantity <= 0:
        base_quantity = DEFAULT_BASE_QUANTITY_PER_UNIT

    return TemplateSupplyItem(
        id=raw.get("id") or f"template-{index}",
        is_new=False,
        vendor_id=raw.get("vendorId") or None,
        product_name=raw.get("productName") or "",
        quantity=max(_number(raw.get("quantity"), 0), 0),
        unit_of_measurement=normalize_container_unit(raw.get("unitOfMeasurement")),
        unit_price=max(_number(raw.get("unitPrice"), 0), 0),
        base_unit=normalize_base_unit(raw.get("baseUnit")),
        base_quantity_per_unit=base_quantity,
        request_method=method,
        special_note=raw.get("specialNote") or None,
    )


def _number(value: Any, default: float) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


class TemplateService:
    """Template-apply business logic."""

    def __init__(self, client: RestaurantBackendClient):
        self.client = client

    # ===================
    # READ OPERATIONS
    # ===================

    def list_templates(self, subdomain: str) -> list[SupplyTemplate]:
        rows = self.client.get_supply_request_templates(subdomain)
        return [SupplyTemplate.model_validate(row) for row in rows]

    def list_template_cards(self, subdomain: str) -> list[TemplateListItem]:
        """Templates for the list screen."""
        return [
            TemplateListItem(
                id=template.id,
                name=template.name,
                item_count=len(template.supplies),
                created_at=template.created_at,
            )
            for template in self.list_templates(subdomain)
        ]

    def get_template(self, subdomain: str, template_id: str) -> SupplyTemplate:
        """
        Raises:
            TemplateNotFoundError: If no template has this id
        """
        template: Optional[SupplyTemplate] = next(
            (t for t in self.list_templates(subdomain) if t.id == template_id),
            None,
        )
        if template is None:
            raise TemplateNotFoundError(template_id)
        return template

    def load_template_items(self, subdomain: str, template_id: str) -> TemplateItemsResponse:
        """Template supplies as wizard state, duplicates folded together."""
        template = self.get_template(subdomain, template_id)
        items = reconcile([
            normalize_template_supply(raw, index)
            for index, raw in enumerate(template.supplies)
        ])

        logger.info(
            "template_loaded",
            subdomain=subdomain,
            template_id=template_id,
            stored_count=len(template.supplies),
            item_count=len(items),
        )

        return TemplateItemsResponse(
            template_id=template_id,
            items=items,
            summary=summarize_line_items(items),
        )

    # ===================
    # EDITING
    # ===================

    def add_item(self, items: Sequence[TemplateSupplyItem]) -> list[TemplateSupplyItem]:
        """Append a blank row flagged as new."""
        return [item.model_copy() for item in items] + [
            TemplateSupplyItem(is_new=True, request_method=RequestMethod.MANUAL)
        ]

    def update_item(
        self,
        items: Sequence[TemplateSupplyItem],
        index: int,
        updated: TemplateSupplyItem,
    ) -> TemplateItemUpdateResponse:
        """
        Apply an edit, merging into an existing row on a key collision.

        Raises:
            LineItemIndexError: If index is out of range
        """
        if index < 0 or index >= len(items):
            raise LineItemIndexError(index, len(items))

        result, merged = merge_edited_item(items, index, updated)

        message = None
        if merged:
            message = f"Merged {updated.product_name} with existing item"
            logger.info("template_item_merged", product_name=updated.product_name)

        return TemplateItemUpdateResponse(items=result, merged=merged, message=message)

    # ===================
    # SUBMISSION
    # ===================

    def apply_template(
        self,
        subdomain: str,
        template_id: str,
        items: Sequence[TemplateSupplyItem],
    ) -> SupplySubmissionResponse:
        """
        Submit the edited template as a new batch.

        Raises:
            EmptySupplyBatchError: If no row is complete
            BackendRequestError: If the backend rejects the batch
        """
        drafts = [item for item in items if item.is_draft_ready]
        merged = reconcile(drafts)
        complete = [item for item in merged if item.is_complete]

        if not complete:
            raise EmptySupplyBatchError("Please add at least one complete supply request")

        excluded_count = (len(items) - len(drafts)) + (len(merged) - len(complete))
        warnings = []
        if excluded_count:
            warnings.append(
                f"{pluralize(excluded_count, 'incomplete supply request')} excluded from submission"
            )

        payload = {
            "templateId": template_id,
            "supplies": [item.to_wire() for item in complete],
        }

        logger.info(
            "applying_template",
            subdomain=subdomain,
            template_id=template_id,
            item_count=len(complete),
            excluded_count=excluded_count,
        )

        backend_response = self.client.apply_supply_request_template(subdomain, payload)

        return SupplySubmissionResponse(
            submitted_count=len(complete),
            excluded_count=excluded_count,
            total_cost=sum(item.line_total for item in complete),
            message=f"Successfully submitted {pluralize(len(complete), 'supply request')}!",
            warnings=warnings,
            backend_response=backend_response,
        )
