"""
Restaurant Supply Desk: Main Application

FastAPI application entry point.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging
import structlog
from datetime import datetime, timezone

from config import settings
from exceptions import AppError
from integrations.restaurant_backend import RestaurantBackendClient, get_backend_tokens

# Configure structured logging
logging.basicConfig(format="%(message)s", level=settings.log_level)

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer() if settings.is_production
            else structlog.dev.ConsoleRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)


def check_backend_connection() -> dict:
    """Check the restaurant backend with a short-lived client."""
    with RestaurantBackendClient.from_settings(settings, get_backend_tokens()) as client:
        return client.check_connection()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup: Check backend connection
    Shutdown: Log
    """
    # Startup
    logger.info(
        "application_starting",
        environment=settings.environment,
        debug=settings.debug,
        backend_url=settings.backend_url,
    )

    if not settings.backend_authenticated:
        logger.warning("backend_token_missing")

    backend_status = check_backend_connection()
    if backend_status["status"] == "healthy":
        logger.info("backend_reachable", status_code=backend_status.get("status_code"))
    else:
        logger.error(
            "backend_unreachable",
            status_code=backend_status.get("status_code"),
            error=backend_status.get("error")
        )

    yield

    # Shutdown
    logger.info("application_shutting_down")


# Create FastAPI app
app = FastAPI(
    title="Restaurant Supply Desk",
    description="Supply request, resupply and template wizards for restaurants",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ===================
# ROUTES
# ===================

@app.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns:
        Basic health status and backend reachability
    """
    backend_status = check_backend_connection()

    return {
        "status": "healthy" if backend_status["status"] == "healthy" else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
        "backend": backend_status
    }


@app.get("/")
async def root():
    """
    Root endpoint.

    Returns:
        API information and available endpoints
    """
    return {
        "name": "Restaurant Supply Desk API",
        "version": "0.1.0",
        "docs": "/docs" if settings.debug else "Disabled in production",
        "health": "/health",
        "endpoints": {
            "supply_requests": "/api/{subdomain}/supply-requests",
            "resupply": "/api/{subdomain}/resupply",
            "supply_templates": "/api/{subdomain}/supply-templates",
            "vendors": "/api/vendors"
        }
    }


# ===================
# ERROR HANDLERS
# ===================

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Application errors raised outside a route body (e.g. in dependencies)."""
    logger.warning(
        "app_error",
        path=request.url.path,
        code=exc.code,
        message=exc.message
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler.

    Catches unhandled exceptions and returns standard error format.
    """
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "details": str(exc) if settings.debug else None,
                "timestamp": datetime.now(timezone.utc).isoformat()
            }
        }
    )


# ===================
# INCLUDE ROUTERS
# ===================
from routes.supply_requests import router as supply_requests_router
from routes.resupply import router as resupply_router
from routes.templates import router as templates_router
from routes.vendors import router as vendors_router

app.include_router(supply_requests_router)  # Prefix already in router
app.include_router(resupply_router)  # Prefix already in router
app.include_router(templates_router)  # Prefix already in router
app.include_router(vendors_router)  # Prefix already in router


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug
    )
