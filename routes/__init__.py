"""
API route modules.

Each module defines routes for one wizard or resource.
"""

from routes.supply_requests import router as supply_requests_router
from routes.resupply import router as resupply_router
from routes.templates import router as templates_router
from routes.vendors import router as vendors_router

__all__ = [
    "supply_requests_router",
    "resupply_router",
    "templates_router",
    "vendors_router",
]
