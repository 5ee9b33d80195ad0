"""
Business logic services.

Each service handles one supply wizard.
"""

from services.line_item_reconciler import (
    identity_key,
    merge_line_items,
    reconcile,
    count_merged,
    merge_edited_item,
)
from services.supply_request_service import SupplyRequestService, summarize_line_items
from services.resupply_service import ResupplyService
from services.template_service import TemplateService, normalize_template_supply

__all__ = [
    "identity_key",
    "merge_line_items",
    "reconcile",
    "count_merged",
    "merge_edited_item",
    "SupplyRequestService",
    "summarize_line_items",
    "ResupplyService",
    "TemplateService",
    "normalize_template_supply",
]
