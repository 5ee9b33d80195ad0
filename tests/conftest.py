"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project directory to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import pytest
from unittest.mock import MagicMock
from typing import Generator

from integrations.restaurant_backend import RestaurantBackendClient


# ===================
# MOCK BACKEND CLIENT
# ===================

@pytest.fixture
def mock_backend() -> MagicMock:
    """
    Create a mock restaurant backend client.

    Usage:
        def test_something(mock_backend):
            mock_backend.get_vendors.return_value = [{"id": "v1", "name": "Acme"}]
    """
    client = MagicMock(spec=RestaurantBackendClient)
    client.request_supply.return_value = {"success": True}
    client.request_resupply.return_value = {"success": True}
    client.apply_supply_request_template.return_value = {"success": True}
    client.get_supply_requests.return_value = []
    client.get_inventory.return_value = []
    client.get_supply_request_templates.return_value = []
    client.get_vendors.return_value = []
    return client


@pytest.fixture
def sample_line_items() -> list:
    """Wizard state as the UI sends it (camelCase)."""
    return [
        {
            "productName": "Rice",
            "unitOfMeasurement": "bag",
            "baseUnit": "kilogram",
            "quantity": 5,
            "unitPrice": 10,
            "baseQuantityPerUnit": 25,
            "vendorId": "vendor-1",
            "requestMethod": "MANUAL",
        },
        {
            "productName": "Tomatoes",
            "unitOfMeasurement": "crate",
            "baseUnit": "kilogram",
            "quantity": 2,
            "unitPrice": 18.5,
            "baseQuantityPerUnit": 10,
            "vendorId": "vendor-2",
            "requestMethod": "MANUAL",
        },
        {
            "productName": "rice",
            "unitOfMeasurement": "bag",
            "baseUnit": "kilogram",
            "quantity": 3,
            "unitPrice": 12,
            "baseQuantityPerUnit": 25,
            "vendorId": "vendor-3",
            "specialNote": "Basmati only",
            "requestMethod": "MANUAL",
        },
    ]


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client(mock_backend) -> Generator:
    """
    Create FastAPI test client wired to the mock backend.

    Usage:
        def test_endpoint(test_client, mock_backend):
            response = test_client.get("/api/vendors")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app
    from routes.common import get_backend_client

    app.dependency_overrides[get_backend_client] = lambda: mock_backend
    yield TestClient(app)
    app.dependency_overrides.clear()
