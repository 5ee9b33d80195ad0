"""
Shared route helpers.

Dependencies build a backend client per request and hand it to services.
The only long-lived backend state is the token holder from
get_backend_tokens. Tests swap get_backend_client via
app.dependency_overrides.
"""

from typing import Annotated, Iterator

import structlog
from fastapi import Depends, Path
from fastapi.responses import JSONResponse

from config.settings import Settings, get_settings
from exceptions import AppError
from integrations.restaurant_backend import (
    BackendTokens,
    RestaurantBackendClient,
    get_backend_tokens,
)
from services.resupply_service import ResupplyService
from services.supply_request_service import SupplyRequestService
from services.template_service import TemplateService

logger = structlog.get_logger(__name__)


Subdomain = Annotated[
    str,
    Path(
        min_length=1,
        max_length=63,
        pattern=r"^[A-Za-z0-9][A-Za-z0-9-]*$",
        description="Restaurant subdomain (tenant)",
    ),
]


# ===================
# EXCEPTION HANDLER
# ===================


def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(status_code=e.status_code, content=e.to_dict())
    # Unexpected error
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={"error": {"code": "INTERNAL_ERROR", "message": "An unexpected error occurred"}},
    )


# ===================
# DEPENDENCIES
# ===================


def get_backend_client(
    settings: Settings = Depends(get_settings),
    tokens: BackendTokens = Depends(get_backend_tokens),
) -> Iterator[RestaurantBackendClient]:
    """Backend client scoped to one request, sharing the process-wide tokens."""
    client = RestaurantBackendClient.from_settings(settings, tokens)
    try:
        yield client
    finally:
        client.close()


def get_supply_request_service(
    client: RestaurantBackendClient = Depends(get_backend_client),
) -> SupplyRequestService:
    return SupplyRequestService(client)


def get_resupply_service(
    client: RestaurantBackendClient = Depends(get_backend_client),
    settings: Settings = Depends(get_settings),
) -> ResupplyService:
    return ResupplyService(client, inventory_page_limit=settings.inventory_page_limit)


def get_template_service(
    client: RestaurantBackendClient = Depends(get_backend_client),
) -> TemplateService:
    return TemplateService(client)
