"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema, CamelSchema
from models.supply_request import (
    RequestMethod,
    SupplyLineItem,
    LineItemsRequest,
    ApplyVendorRequest,
    LineItemTotals,
    SupplyBatchSummary,
    ReconcileResponse,
    SupplyReviewResponse,
    SupplyImportResponse,
    SupplySubmissionResponse,
    Vendor,
)
from models.resupply import (
    ResupplyLine,
    ResupplyRequest,
    InventoryItem,
    ResupplyLineItem,
    ResupplySubmissionResponse,
)
from models.template import (
    TemplateSupplyItem,
    SupplyTemplate,
    TemplateListItem,
    TemplateItemsResponse,
    TemplateItemsRequest,
    TemplateItemUpdateRequest,
    TemplateItemUpdateResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "CamelSchema",

    # Supply requests
    "RequestMethod",
    "SupplyLineItem",
    "LineItemsRequest",
    "ApplyVendorRequest",
    "LineItemTotals",
    "SupplyBatchSummary",
    "ReconcileResponse",
    "SupplyReviewResponse",
    "SupplyImportResponse",
    "SupplySubmissionResponse",
    "Vendor",

    # Resupply
    "ResupplyLine",
    "ResupplyRequest",
    "InventoryItem",
    "ResupplyLineItem",
    "ResupplySubmissionResponse",

    # Templates
    "TemplateSupplyItem",
    "SupplyTemplate",
    "TemplateListItem",
    "TemplateItemsResponse",
    "TemplateItemsRequest",
    "TemplateItemUpdateRequest",
    "TemplateItemUpdateResponse",
]
