"""
Unit tests for ResupplyService.

Run: pytest tests/unit/test_resupply_service.py -v
"""

import pytest

from exceptions import EmptySupplyBatchError, InventoryItemNotFoundError
from models.resupply import InventoryItem, ResupplyLine
from services.resupply_service import ResupplyService
from tests.factories import InventoryFactory


@pytest.fixture
def service(mock_backend) -> ResupplyService:
    return ResupplyService(mock_backend, inventory_page_limit=50)


class TestInventoryItem:
    """Tests for InventoryItem parsing."""

    def test_flattens_nested_unit(self):
        """Should read units from a nested unitOfMeasurement object."""
        record = InventoryFactory.create(
            id="inv-1", unit_of_measurement="sack", base_unit="pound",
            base_quantity_per_unit=50, nested_unit=True,
        )

        item = InventoryItem.model_validate(record)

        assert item.unit_of_measurement == "sack"
        assert item.base_unit == "pound"
        assert item.base_quantity_per_unit == 50

    def test_null_numbers_use_defaults(self):
        """Should treat explicit nulls as missing."""
        item = InventoryItem.model_validate({
            "id": "inv-1",
            "productName": "Rice",
            "unitOfMeasurement": "bag",
            "unitPrice": None,
            "baseUnit": None,
            "baseQuantityPerUnit": None,
        })

        assert item.unit_price == 0
        assert item.base_unit == "piece"
        assert item.base_quantity_per_unit == 1

    def test_does_not_mutate_input(self):
        record = InventoryFactory.create(nested_unit=True)

        InventoryItem.model_validate(record)

        assert isinstance(record["unitOfMeasurement"], dict)


class TestResupplyServiceLoadInventory:
    """Tests for ResupplyService.load_inventory()"""

    def test_keys_by_id_and_skips_bad_rows(self, service, mock_backend):
        """Should index valid rows and skip malformed ones."""
        mock_backend.get_inventory.return_value = [
            InventoryFactory.create(id="inv-1"),
            {"productName": "No id"},
        ]

        inventory = service.load_inventory("greenfork", ["inv-1"])

        assert list(inventory) == ["inv-1"]
        mock_backend.get_inventory.assert_called_once_with("greenfork", page=1, limit=50)

    def test_pages_until_id_found(self, service, mock_backend):
        """Should keep paging while a wanted id is missing and pages are full."""
        first_page = [InventoryFactory.create(id=f"inv-{n}") for n in range(50)]
        second_page = [InventoryFactory.create(id="inv-late", product_name="Saffron")]
        mock_backend.get_inventory.side_effect = [first_page, second_page]

        inventory = service.load_inventory("greenfork", ["inv-0", "inv-late"])

        assert inventory["inv-late"].product_name == "Saffron"
        assert len(inventory) == 51
        assert [c.kwargs["page"] for c in mock_backend.get_inventory.call_args_list] == [1, 2]

    def test_stops_once_all_ids_found(self, service, mock_backend):
        """Should not fetch page 2 when page 1 already holds every id."""
        mock_backend.get_inventory.return_value = [InventoryFactory.create(id=f"inv-{n}") for n in range(50)]

        service.load_inventory("greenfork", ["inv-3"])

        mock_backend.get_inventory.assert_called_once_with("greenfork", page=1, limit=50)

    def test_stops_at_empty_page(self, service, mock_backend):
        """Should stop when the backend runs out of rows."""
        full_page = [InventoryFactory.create(id=f"inv-{n}") for n in range(50)]
        mock_backend.get_inventory.side_effect = [full_page, []]

        inventory = service.load_inventory("greenfork", ["missing"])

        assert "missing" not in inventory
        assert mock_backend.get_inventory.call_count == 2


class TestResupplyServiceSubmit:
    """Tests for ResupplyService.submit()"""

    def test_submit_merges_same_product(self, service, mock_backend):
        """Two inventory rows for the same product and units collapse into one."""
        mock_backend.get_inventory.return_value = [
            InventoryFactory.create(id="inv-1", product_name="Rice"),
            InventoryFactory.create(id="inv-2", product_name="rice"),
            InventoryFactory.create(id="inv-3", product_name="Beans"),
        ]
        lines = [
            ResupplyLine(inventory_id="inv-1", quantity=2),
            ResupplyLine(inventory_id="inv-3", quantity=1),
            ResupplyLine(inventory_id="inv-2", quantity=3),
        ]

        response = service.submit("greenfork", lines)

        subdomain, payload = mock_backend.request_resupply.call_args.args
        assert subdomain == "greenfork"
        assert payload == [
            {"inventoryId": "inv-1", "quantity": 5},
            {"inventoryId": "inv-3", "quantity": 1},
        ]
        assert response.submitted_count == 2
        assert response.merged_count == 1
        assert response.message == "Successfully submitted 2 resupply requests!"

    def test_submit_resolves_id_from_second_page(self, service, mock_backend):
        """An inventory id beyond the first page should still resolve."""
        first_page = [InventoryFactory.create(id=f"inv-{n}") for n in range(50)]
        second_page = [InventoryFactory.create(id="inv-late", product_name="Saffron")]
        mock_backend.get_inventory.side_effect = [first_page, second_page]

        response = service.submit("greenfork", [ResupplyLine(inventory_id="inv-late", quantity=2)])

        assert response.submitted_count == 1
        assert mock_backend.request_resupply.call_args.args[1] == [{"inventoryId": "inv-late", "quantity": 2}]

    def test_submit_ignores_incomplete_rows(self, service, mock_backend):
        """Should drop rows without an inventory id or quantity."""
        mock_backend.get_inventory.return_value = [InventoryFactory.create(id="inv-1")]
        lines = [
            ResupplyLine(inventory_id="inv-1", quantity=2),
            ResupplyLine(inventory_id=None, quantity=4),
            ResupplyLine(inventory_id="inv-1", quantity=0),
        ]

        response = service.submit("greenfork", lines)

        assert response.submitted_count == 1
        assert mock_backend.request_resupply.call_args.args[1] == [{"inventoryId": "inv-1", "quantity": 2}]

    def test_submit_nothing_complete_raises(self, service, mock_backend):
        """Should raise EmptySupplyBatchError without calling the backend."""
        with pytest.raises(EmptySupplyBatchError) as exc_info:
            service.submit("greenfork", [ResupplyLine()])

        assert exc_info.value.message == "Please add at least one complete resupply request"
        mock_backend.get_inventory.assert_not_called()
        mock_backend.request_resupply.assert_not_called()

    def test_submit_unknown_inventory_raises(self, service, mock_backend):
        """Should raise InventoryItemNotFoundError for an unknown id."""
        mock_backend.get_inventory.return_value = [InventoryFactory.create(id="inv-1")]

        with pytest.raises(InventoryItemNotFoundError) as exc_info:
            service.submit("greenfork", [ResupplyLine(inventory_id="missing", quantity=1)])

        assert exc_info.value.status_code == 404
        mock_backend.request_resupply.assert_not_called()
