"""
Test data factories.

Uses factory pattern to generate consistent test data.
"""

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from models.supply_request import RequestMethod, SupplyLineItem
from models.template import TemplateSupplyItem


class SupplyLineItemFactory:
    """
    Factory for creating test line items.

    Usage:
        # Create with defaults
        item = SupplyLineItemFactory.create()

        # Create with overrides
        item = SupplyLineItemFactory.create(product_name="Rice", quantity=5)

        # Create multiple (distinct products)
        items = SupplyLineItemFactory.create_batch(3)
    """

    _counter = 0

    @classmethod
    def _next_counter(cls) -> int:
        cls._counter += 1
        return cls._counter

    @classmethod
    def create(
        cls,
        product_name: Optional[str] = None,
        unit_of_measurement: str = "bag",
        base_unit: str = "kilogram",
        quantity: float = 1,
        unit_price: float = 10,
        base_quantity_per_unit: float = 1,
        vendor_id: Optional[str] = "vendor-1",
        special_note: Optional[str] = None,
        request_method: RequestMethod = RequestMethod.MANUAL,
    ) -> SupplyLineItem:
        """Create a single complete line item."""
        counter = cls._next_counter()
        return SupplyLineItem(
            product_name=product_name or f"Test Product {counter}",
            unit_of_measurement=unit_of_measurement,
            base_unit=base_unit,
            quantity=quantity,
            unit_price=unit_price,
            base_quantity_per_unit=base_quantity_per_unit,
            vendor_id=vendor_id,
            special_note=special_note,
            request_method=request_method,
        )

    @classmethod
    def create_batch(cls, count: int, **overrides) -> list:
        """Create multiple line items with distinct product names."""
        return [cls.create(**overrides) for _ in range(count)]

    @classmethod
    def create_without_vendor(cls, **overrides) -> SupplyLineItem:
        """Create an item that is draft-ready but not complete."""
        return cls.create(vendor_id=None, **overrides)

    @classmethod
    def create_blank(cls) -> SupplyLineItem:
        """A freshly added, empty form row."""
        return SupplyLineItem()

    @classmethod
    def create_template_item(cls, id: Optional[str] = None, **overrides) -> TemplateSupplyItem:
        """Create a template row."""
        item = cls.create(**overrides)
        return TemplateSupplyItem(id=id or str(uuid4()), **item.model_dump())

    @classmethod
    def reset_counter(cls):
        """Reset the counter (call in test setup if needed)."""
        cls._counter = 0


class InventoryFactory:
    """Factory for backend inventory records (camelCase dicts)."""

    @classmethod
    def create(
        cls,
        id: Optional[str] = None,
        product_name: str = "Rice",
        unit_of_measurement: str = "bag",
        base_unit: str = "kilogram",
        base_quantity_per_unit: float = 25,
        unit_price: float = 10,
        closing_stock: float = 4,
        vendor_id: Optional[str] = "vendor-1",
        nested_unit: bool = False,
    ) -> dict:
        """
        Create a single inventory record.

        Args:
            nested_unit: Send unitOfMeasurement as {name, baseUnit, baseQuantityPerUnit}
        """
        record = {
            "id": id or str(uuid4()),
            "productName": product_name,
            "unitPrice": unit_price,
            "closingStock": closing_stock,
            "vendorId": vendor_id,
        }
        if nested_unit:
            record["unitOfMeasurement"] = {
                "name": unit_of_measurement,
                "baseUnit": base_unit,
                "baseQuantityPerUnit": base_quantity_per_unit,
            }
        else:
            record["unitOfMeasurement"] = unit_of_measurement
            record["baseUnit"] = base_unit
            record["baseQuantityPerUnit"] = base_quantity_per_unit
        return record


class TemplateFactory:
    """Factory for backend supply request templates."""

    @classmethod
    def create(
        cls,
        id: Optional[str] = None,
        name: str = "Weekly produce",
        supplies: Optional[list] = None,
        created_at: Optional[str] = None,
    ) -> dict:
        """Create a single template dict."""
        return {
            "id": id or str(uuid4()),
            "name": name,
            "supplies": supplies if supplies is not None else [cls.supply()],
            "createdAt": created_at or datetime.now(timezone.utc).isoformat(),
        }

    @classmethod
    def supply(
        cls,
        product_name: str = "Rice",
        quantity: float = 2,
        unit_price: float = 10,
        unit_of_measurement: str = "bag",
        base_unit: str = "kilogram",
        vendor_id: Optional[str] = "vendor-1",
        **extra,
    ) -> dict:
        """Create one stored template supply."""
        return {
            "productName": product_name,
            "quantity": quantity,
            "unitPrice": unit_price,
            "unitOfMeasurement": unit_of_measurement,
            "baseUnit": base_unit,
            "baseQuantityPerUnit": 1,
            "vendorId": vendor_id,
            "requestMethod": "MANUAL",
            **extra,
        }
