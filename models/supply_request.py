"""
Supply request schemas.

A supply request is a batch of line items asking vendors for stock.
Line items live only in wizard state until the batch is submitted;
after that the restaurant backend owns them.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import Field, field_validator

from config.units import (
    DEFAULT_BASE_QUANTITY_PER_UNIT,
    DEFAULT_BASE_UNIT,
    DEFAULT_CONTAINER_UNIT,
)
from models.base import CamelSchema


class RequestMethod(str, Enum):
    """How a line item entered the wizard."""
    MANUAL = "MANUAL"  # Typed into the form
    BULK = "BULK"      # Imported from CSV or flagged as bulk


# ===================
# LINE ITEMS
# ===================

class SupplyLineItem(CamelSchema):
    """
    One requested product.

    Identity is product name (case-insensitive) + container unit + base unit.
    """

    product_name: str = Field(default="", max_length=255, description="Product name")
    unit_of_measurement: str = Field(
        default=DEFAULT_CONTAINER_UNIT,
        description="Container unit the vendor ships in"
    )
    base_unit: str = Field(
        default=DEFAULT_BASE_UNIT,
        description="Unit inventory is tracked in"
    )
    quantity: float = Field(default=0, ge=0, description="Containers requested")
    unit_price: float = Field(default=0, ge=0, description="Price per container")
    base_quantity_per_unit: float = Field(
        default=DEFAULT_BASE_QUANTITY_PER_UNIT,
        gt=0,
        description="Base units per container"
    )
    vendor_id: Optional[str] = Field(None, description="Vendor UUID")
    special_note: Optional[str] = Field(None, max_length=1000, description="Note for the vendor")
    request_method: RequestMethod = Field(default=RequestMethod.MANUAL)

    @field_validator("vendor_id", "special_note")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Empty form fields arrive as ""; store them as missing."""
        return v or None

    @property
    def line_total(self) -> float:
        return self.quantity * self.unit_price

    @property
    def total_base_quantity(self) -> float:
        return self.quantity * self.base_quantity_per_unit

    @property
    def has_vendor(self) -> bool:
        return bool(self.vendor_id)

    @property
    def is_draft_ready(self) -> bool:
        """Enough to leave the edit step: a product name and a positive quantity."""
        return bool(self.product_name) and self.quantity > 0

    @property
    def is_complete(self) -> bool:
        """Every field the backend requires is present and in range."""
        return (
            self.has_vendor
            and self.is_draft_ready
            and bool(self.unit_of_measurement)
            and self.unit_price >= 0
            and bool(self.base_unit)
            and self.base_quantity_per_unit > 0
        )


# ===================
# REQUEST BODIES
# ===================

class LineItemsRequest(CamelSchema):
    """Wizard state sent for reconcile, review or submit."""

    items: list[SupplyLineItem] = Field(default_factory=list)


class ApplyVendorRequest(CamelSchema):
    """Assign one vendor to every line item."""

    vendor_id: str = Field(..., min_length=1, description="Vendor UUID")
    items: list[SupplyLineItem] = Field(default_factory=list)


# ===================
# RESPONSES
# ===================

class LineItemTotals(CamelSchema):
    """Derived figures for one line item (review screen)."""

    product_name: str
    line_total: float
    total_base_quantity: float
    base_unit: str


class SupplyBatchSummary(CamelSchema):
    """Totals for a batch of line items."""

    item_count: int = 0
    total_quantity: float = 0
    total_cost: float = 0
    missing_vendor_count: int = 0
    lines: list[LineItemTotals] = Field(default_factory=list)


class ReconcileResponse(CamelSchema):
    """Reconciled line items."""

    items: list[SupplyLineItem]
    merged_count: int = Field(0, description="Input items folded into an earlier one")
    summary: SupplyBatchSummary


class SupplyReviewResponse(CamelSchema):
    """Draft batch ready for the review step."""

    items: list[SupplyLineItem]
    summary: SupplyBatchSummary
    warnings: list[str] = Field(default_factory=list)


class SupplyImportResponse(CamelSchema):
    """Line items imported from a CSV upload."""

    items: list[SupplyLineItem]
    summary: SupplyBatchSummary
    skipped_rows: list[int] = Field(default_factory=list, description="CSV rows without a product name")
    warnings: list[str] = Field(default_factory=list)


class SupplySubmissionResponse(CamelSchema):
    """Outcome of forwarding a batch to the backend."""

    submitted_count: int
    excluded_count: int = 0
    total_cost: float = 0
    message: str
    warnings: list[str] = Field(default_factory=list)
    backend_response: Optional[Any] = None


class Vendor(CamelSchema):
    """Vendor as listed by the backend."""

    id: str
    name: str
