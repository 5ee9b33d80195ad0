"""
Unit catalogue for supply requests.

Container units are what a vendor ships (crate, bag, carton...).
Base units are what the kitchen tracks stock in (kilogram, piece...).
Both lists mirror the values the restaurant backend accepts.
"""

from typing import Optional


# =============================================================================
# CONTAINER UNITS
# =============================================================================

CONTAINER_UNITS = (
    "crate", "ventilatedCrate", "baleArmCrate",
    "basket", "wickerBasket", "plasticBasket",
    "box", "carton", "foldingBox",
    "bag", "sack", "plasticBag",
    "bottle", "jar", "pack",
    "tray", "bakeryTray", "meatTray",
    "pallet", "bin", "tote", "barrel", "canister",
)

DEFAULT_CONTAINER_UNIT = "crate"


# =============================================================================
# BASE UNITS
# =============================================================================

BASE_UNITS = (
    "liter", "milliliter", "gallon", "cup",
    "gram", "kilogram", "ounce", "pound",
    "piece", "dozen", "unit", "squareMeter",
)

DEFAULT_BASE_UNIT = "piece"

# 1 container = 1 base unit unless the row says otherwise
DEFAULT_BASE_QUANTITY_PER_UNIT = 1.0


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def normalize_container_unit(value: Optional[str]) -> str:
    """
    Return a known container unit, falling back to the default.

    Matching is exact: the backend stores camelCase names like "bakeryTray".
    """
    if value and value in CONTAINER_UNITS:
        return value
    return DEFAULT_CONTAINER_UNIT


def normalize_base_unit(value: Optional[str]) -> str:
    """Return a known base unit, falling back to the default."""
    if value and value in BASE_UNITS:
        return value
    return DEFAULT_BASE_UNIT
