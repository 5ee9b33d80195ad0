"""
Resupply Service: re-order products already in inventory.

The form only carries inventory ids and quantities. Each id is resolved
against the backend's inventory so the lines can go through the shared
reconciler (two rows for the same product/unit collapse into one).
"""

from typing import Iterable, Sequence

import structlog
from pydantic import ValidationError as PydanticValidationError

from config.units import DEFAULT_BASE_QUANTITY_PER_UNIT, normalize_container_unit
from exceptions import EmptySupplyBatchError, InventoryItemNotFoundError
from integrations.restaurant_backend import RestaurantBackendClient
from models.resupply import (
    InventoryItem,
    ResupplyLine,
    ResupplyLineItem,
    ResupplySubmissionResponse,
)
from models.supply_request import RequestMethod
from services.line_item_reconciler import count_merged, reconcile
from utils.text_utils import pluralize

logger = structlog.get_logger(__name__)


class ResupplyService:
    """Resupply business logic."""

    def __init__(self, client: RestaurantBackendClient, inventory_page_limit: int = 100):
        self.client = client
        self.inventory_page_limit = inventory_page_limit

    def load_inventory(self, subdomain: str, inventory_ids: Iterable[str]) -> dict[str, InventoryItem]:
        """
        Inventory records keyed by id, paging until every wanted id is seen.

        Paging stops early once all ids are found, or at the first short or
        empty page. Malformed rows are skipped.
        """
        wanted = set(inventory_ids)
        inventory = {}
        page = 1

        while True:
            rows = self.client.get_inventory(subdomain, page=page, limit=self.inventory_page_limit)
            for row in rows:
                try:
                    record = InventoryItem.model_validate(row)
                except PydanticValidationError as e:
                    logger.warning("inventory_row_skipped", page=page, error=str(e))
                    continue
                inventory[record.id] = record

            if not rows or wanted.issubset(inventory) or len(rows) < self.inventory_page_limit:
                break
            page += 1

        logger.debug("inventory_loaded", subdomain=subdomain, count=len(inventory), pages=page)
        return inventory

    def build_line_items(self, subdomain: str, lines: Sequence[ResupplyLine]) -> list[ResupplyLineItem]:
        """
        Resolve form rows into line items.

        Raises:
            EmptySupplyBatchError: If no row has an inventory id and positive quantity
            InventoryItemNotFoundError: If an inventory id is unknown
        """
        complete = [line for line in lines if line.is_complete]
        if not complete:
            raise EmptySupplyBatchError("Please add at least one complete resupply request")

        inventory = self.load_inventory(subdomain, [line.inventory_id for line in complete])

        items = []
        for line in complete:
            record = inventory.get(line.inventory_id)
            if record is None:
                raise InventoryItemNotFoundError(line.inventory_id)

            base_quantity = record.base_quantity_per_unit
            if base_quantity <= 0:
                base_quantity = DEFAULT_BASE_QUANTITY_PER_UNIT

            items.append(ResupplyLineItem(
                inventory_id=record.id,
                product_name=record.product_name,
                unit_of_measurement=normalize_container_unit(record.unit_of_measurement),
                base_unit=record.base_unit,
                base_quantity_per_unit=base_quantity,
                unit_price=max(record.unit_price, 0),
                vendor_id=record.vendor_id,
                quantity=line.quantity,
                request_method=RequestMethod.MANUAL,
            ))

        return items

    def submit(self, subdomain: str, lines: Sequence[ResupplyLine]) -> ResupplySubmissionResponse:
        """
        Forward a resupply batch to the backend.

        Raises:
            EmptySupplyBatchError: If no row is complete
            InventoryItemNotFoundError: If an inventory id is unknown
            BackendRequestError: If the backend rejects the batch
        """
        items = self.build_line_items(subdomain, lines)
        merged = reconcile(items)
        merged_count = count_merged(items, merged)

        logger.info(
            "submitting_resupply_batch",
            subdomain=subdomain,
            item_count=len(merged),
            merged_count=merged_count,
        )

        backend_response = self.client.request_resupply(
            subdomain,
            [item.to_resupply_payload() for item in merged],
        )

        logger.info("resupply_batch_submitted", subdomain=subdomain, item_count=len(merged))

        return ResupplySubmissionResponse(
            submitted_count=len(merged),
            merged_count=merged_count,
            message=f"Successfully submitted {pluralize(len(merged), 'resupply request')}!",
            backend_response=backend_response,
        )
