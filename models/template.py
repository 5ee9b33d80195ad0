"""
Supply request template schemas.

A template is a saved set of line items that can be loaded, edited and
submitted again as a new batch.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from models.base import CamelSchema
from models.supply_request import SupplyBatchSummary, SupplyLineItem


class TemplateSupplyItem(SupplyLineItem):
    """Template line item. Existing rows keep their id; added rows are flagged new."""

    id: Optional[str] = Field(None, description="Template supply UUID")
    is_new: bool = Field(default=False, description="Added while applying the template")


class SupplyTemplate(CamelSchema):
    """Template as returned by the backend (supplies left raw, normalised on load)."""

    id: str
    name: str = ""
    supplies: list[dict[str, Any]] = Field(default_factory=list)
    created_at: Optional[datetime] = None


class TemplateListItem(CamelSchema):
    """Template card for the list screen."""

    id: str
    name: str
    item_count: int
    created_at: Optional[datetime] = None


class TemplateItemsResponse(CamelSchema):
    """Template supplies loaded into wizard state."""

    template_id: str
    items: list[TemplateSupplyItem]
    summary: SupplyBatchSummary


class TemplateItemsRequest(CamelSchema):
    """Current wizard state for a template."""

    items: list[TemplateSupplyItem] = Field(default_factory=list)


class TemplateItemUpdateRequest(CamelSchema):
    """Replace one line item in the wizard state."""

    items: list[TemplateSupplyItem] = Field(default_factory=list)
    item: TemplateSupplyItem


class TemplateItemUpdateResponse(CamelSchema):
    """Wizard state after an edit."""

    items: list[TemplateSupplyItem]
    merged: bool = Field(False, description="Edited item was folded into an existing one")
    message: Optional[str] = None
