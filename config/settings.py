"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # RESTAURANT BACKEND
    # ===================
    backend_url: str = Field(
        default="http://localhost:3333/",
        description="Base URL of the restaurant REST backend"
    )
    backend_timeout_seconds: float = Field(
        default=15.0,
        gt=0,
        le=120,
        description="Timeout for a single backend request"
    )
    backend_access_token: Optional[str] = Field(
        None,
        description="Bearer token sent with backend requests"
    )
    backend_refresh_token: Optional[str] = Field(
        None,
        description="Refresh token used when the access token expires"
    )
    backend_user_role: str = Field(
        default="RESTAURANT",
        description="Role sent with token refresh requests"
    )

    # ===================
    # SUPPLY WIZARDS
    # ===================
    csv_max_upload_bytes: int = Field(
        default=2 * 1024 * 1024,
        ge=1024,
        le=50 * 1024 * 1024,
        description="Largest CSV accepted by the bulk supply import"
    )
    inventory_page_limit: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Page size when paging through backend inventory"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=8000,
        ge=1000,
        le=65535,
        description="API port"
    )
    cors_origins: list[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173",
        ],
        description="Origins allowed to call the API"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def backend_authenticated(self) -> bool:
        """Check if a backend access token is configured."""
        return bool(self.backend_access_token)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
