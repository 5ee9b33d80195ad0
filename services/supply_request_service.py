"""
Supply Request Service: new supply wizard.

Step 1 collects line items (typed or imported from CSV), step 2 reviews
them, then the batch is forwarded to the restaurant backend. Duplicate
products are folded together by the shared reconciler at every step.
"""

from typing import Any, Sequence

import structlog

from exceptions import (
    BackendRequestError,
    EmptySupplyBatchError,
    MissingVendorError,
    SupplyRequestNotFoundError,
)
from integrations.restaurant_backend import RestaurantBackendClient
from models.supply_request import (
    LineItemTotals,
    ReconcileResponse,
    SupplyBatchSummary,
    SupplyImportResponse,
    SupplyLineItem,
    SupplyReviewResponse,
    SupplySubmissionResponse,
    Vendor,
)
from parsers.supply_csv_parser import parse_supply_csv
from services.line_item_reconciler import count_merged, reconcile
from utils.text_utils import pluralize

logger = structlog.get_logger(__name__)


def summarize_line_items(items: Sequence[SupplyLineItem]) -> SupplyBatchSummary:
    """Totals shown on the review step."""
    return SupplyBatchSummary(
        item_count=len(items),
        total_quantity=sum(item.quantity for item in items),
        total_cost=sum(item.line_total for item in items),
        missing_vendor_count=sum(1 for item in items if not item.has_vendor),
        lines=[
            LineItemTotals(
                product_name=item.product_name,
                line_total=item.line_total,
                total_base_quantity=item.total_base_quantity,
                base_unit=item.base_unit,
            )
            for item in items
        ],
    )


def missing_vendor_warning(count: int) -> str:
    return f"{pluralize(count, 'item')} missing vendor. You can add vendors in the review step."


class SupplyRequestService:
    """
    New supply request business logic.

    Stateless: wizard state comes in with every call.
    """

    def __init__(self, client: RestaurantBackendClient):
        self.client = client

    # ===================
    # WIZARD STEPS
    # ===================

    def reconcile_items(self, items: Sequence[SupplyLineItem]) -> ReconcileResponse:
        """Fold duplicate products together."""
        merged = reconcile(items)
        merged_count = count_merged(items, merged)

        logger.debug("line_items_reconciled", input_count=len(items), merged_count=merged_count)

        return ReconcileResponse(
            items=merged,
            merged_count=merged_count,
            summary=summarize_line_items(merged),
        )

    def import_csv(self, content: bytes) -> SupplyImportResponse:
        """
        Load line items from a bulk upload CSV.

        Raises:
            SupplyCSVParseError: If the CSV is unreadable or has no usable rows
        """
        parsed = parse_supply_csv(content)
        items = reconcile(parsed.items)

        warnings = []
        merged_count = count_merged(parsed.items, items)
        if merged_count:
            warnings.append(f"Merged {pluralize(merged_count, 'duplicate row')} into existing items.")

        missing = sum(1 for item in items if not item.has_vendor)
        if missing:
            warnings.append(missing_vendor_warning(missing))

        logger.info(
            "supply_csv_imported",
            item_count=len(items),
            merged_count=merged_count,
            skipped_count=len(parsed.skipped_rows),
        )

        return SupplyImportResponse(
            items=items,
            summary=summarize_line_items(items),
            skipped_rows=parsed.skipped_rows,
            warnings=warnings,
        )

    def review(self, items: Sequence[SupplyLineItem]) -> SupplyReviewResponse:
        """
        Move from the edit step to the review step.

        Items without a product name or a positive quantity are dropped.
        Missing vendors only produce a warning here; submit enforces them.

        Raises:
            EmptySupplyBatchError: If no item has a product name and quantity
        """
        drafts = [item for item in items if item.is_draft_ready]
        if not drafts:
            raise EmptySupplyBatchError(
                "Please fill in at least one complete supply request with product name and quantity"
            )

        merged = reconcile(drafts)

        warnings = []
        missing = sum(1 for item in merged if not item.has_vendor)
        if missing:
            warnings.append(missing_vendor_warning(missing))

        return SupplyReviewResponse(
            items=merged,
            summary=summarize_line_items(merged),
            warnings=warnings,
        )

    def apply_vendor(self, items: Sequence[SupplyLineItem], vendor_id: str) -> list[SupplyLineItem]:
        """Assign one vendor to every line item."""
        logger.info("vendor_applied_to_all", vendor_id=vendor_id, item_count=len(items))
        return [item.model_copy(update={"vendor_id": vendor_id}) for item in items]

    # ===================
    # SUBMISSION
    # ===================

    def submit(self, subdomain: str, items: Sequence[SupplyLineItem]) -> SupplySubmissionResponse:
        """
        Forward a batch to the backend.

        Args:
            subdomain: Restaurant tenant
            items: Wizard state (may include blank or incomplete rows)

        Returns:
            SupplySubmissionResponse with counts and the backend reply

        Raises:
            MissingVendorError: If nothing is complete because vendors are missing
            EmptySupplyBatchError: If nothing is complete for any other reason
            BackendRequestError: If the backend rejects the batch
        """
        drafts = [item for item in items if item.is_draft_ready]
        merged = reconcile(drafts)
        complete = [item for item in merged if item.is_complete]

        if not complete:
            missing = sum(1 for item in merged if not item.has_vendor)
            if missing:
                raise MissingVendorError(missing)
            raise EmptySupplyBatchError(
                "Please add at least one complete supply request with all required fields"
            )

        excluded_count = (len(items) - len(drafts)) + (len(merged) - len(complete))
        total_cost = sum(item.line_total for item in complete)
        warnings = []
        if excluded_count:
            warnings.append(
                f"{pluralize(excluded_count, 'incomplete supply request')} excluded from submission"
            )

        logger.info(
            "submitting_supply_batch",
            subdomain=subdomain,
            item_count=len(complete),
            excluded_count=excluded_count,
        )

        backend_response = self.client.request_supply(
            subdomain,
            [item.to_wire() for item in complete],
        )

        logger.info("supply_batch_submitted", subdomain=subdomain, item_count=len(complete))

        return SupplySubmissionResponse(
            submitted_count=len(complete),
            excluded_count=excluded_count,
            total_cost=total_cost,
            message=f"Successfully submitted {pluralize(len(complete), 'supply request')}!",
            warnings=warnings,
            backend_response=backend_response,
        )

    # ===================
    # READ OPERATIONS
    # ===================

    def list_requests(self, subdomain: str) -> Any:
        """All supply requests for a restaurant, as the backend returns them."""
        return self.client.get_supply_requests(subdomain)

    def get_request(self, subdomain: str, request_id: str) -> Any:
        """
        One supply request.

        Raises:
            SupplyRequestNotFoundError: If the backend has no such request
        """
        try:
            result = self.client.get_supply_request(subdomain, request_id)
        except BackendRequestError as e:
            if e.backend_status == 404:
                raise SupplyRequestNotFoundError(request_id)
            raise

        if not result:
            raise SupplyRequestNotFoundError(request_id)

        return result

    def list_vendors(self) -> list[Vendor]:
        """Vendors offered in the vendor picker."""
        rows = self.client.get_vendors()
        return [Vendor.model_validate(row) for row in rows]
