"""
Resupply schemas.

A resupply re-orders products already in inventory. The UI only sends
inventory ids and quantities; product details come from the backend.
"""

from typing import Any, Optional

from pydantic import Field, model_validator

from config.units import DEFAULT_BASE_QUANTITY_PER_UNIT, DEFAULT_BASE_UNIT
from models.base import CamelSchema
from models.supply_request import SupplyLineItem


class ResupplyLine(CamelSchema):
    """One row of the resupply form."""

    inventory_id: Optional[str] = Field(None, description="Inventory item UUID")
    quantity: float = Field(default=0, ge=0, description="Containers requested")

    @property
    def is_complete(self) -> bool:
        return bool(self.inventory_id) and self.quantity > 0


class ResupplyRequest(CamelSchema):
    """Resupply form state."""

    items: list[ResupplyLine] = Field(default_factory=list)


class InventoryItem(CamelSchema):
    """
    Inventory record as returned by the backend.

    unitOfMeasurement is either a plain unit name or a nested unit object
    ({name, baseUnit, baseQuantityPerUnit}); both are flattened here.
    """

    id: str
    product_name: str
    unit_of_measurement: str = ""
    base_unit: str = DEFAULT_BASE_UNIT
    base_quantity_per_unit: float = DEFAULT_BASE_QUANTITY_PER_UNIT
    unit_price: float = 0
    closing_stock: float = 0
    vendor_id: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def flatten_unit(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        unit = data.get("unitOfMeasurement", data.get("unit_of_measurement"))
        if isinstance(unit, dict):
            data.pop("unit_of_measurement", None)
            data["unitOfMeasurement"] = unit.get("name") or ""
            data.setdefault("baseUnit", unit.get("baseUnit") or DEFAULT_BASE_UNIT)
            data.setdefault(
                "baseQuantityPerUnit",
                unit.get("baseQuantityPerUnit") or DEFAULT_BASE_QUANTITY_PER_UNIT,
            )
        # Backend sends explicit nulls for unset numeric columns
        for key in ("unitPrice", "closingStock", "baseQuantityPerUnit", "baseUnit"):
            if key in data and data[key] is None:
                del data[key]
        return data


class ResupplyLineItem(SupplyLineItem):
    """A supply line item that points back at an inventory record."""

    inventory_id: str = Field(..., description="Inventory item UUID")

    def to_resupply_payload(self) -> dict:
        return {"inventoryId": self.inventory_id, "quantity": self.quantity}


class ResupplySubmissionResponse(CamelSchema):
    """Outcome of a resupply submission."""

    submitted_count: int
    merged_count: int = 0
    message: str
    backend_response: Optional[Any] = None
