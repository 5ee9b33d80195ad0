"""
Configuration module.

Exports:
    settings: Application settings instance
    get_settings: Function to get settings (for dependency injection)
    CONTAINER_UNITS / BASE_UNITS: Unit catalogue accepted by the backend
"""

from config.settings import settings, get_settings, Settings
from config.units import (
    CONTAINER_UNITS,
    BASE_UNITS,
    DEFAULT_CONTAINER_UNIT,
    DEFAULT_BASE_UNIT,
    DEFAULT_BASE_QUANTITY_PER_UNIT,
    normalize_container_unit,
    normalize_base_unit,
)

__all__ = [
    # Settings
    "settings",
    "get_settings",
    "Settings",

    # Units
    "CONTAINER_UNITS",
    "BASE_UNITS",
    "DEFAULT_CONTAINER_UNIT",
    "DEFAULT_BASE_UNIT",
    "DEFAULT_BASE_QUANTITY_PER_UNIT",
    "normalize_container_unit",
    "normalize_base_unit",
]
