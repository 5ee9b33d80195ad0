"""
File parsers module.
"""

from parsers.supply_csv_parser import (
    parse_supply_csv,
    SupplyCSVParseResult,
)

__all__ = [
    "parse_supply_csv",
    "SupplyCSVParseResult",
]
