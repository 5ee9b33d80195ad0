"""
CSV parser for bulk supply uploads.

Accepts the supply template CSV as well as an inventory export, so column
names are matched against a list of aliases instead of a fixed header.
Every imported row becomes a BULK line item.
"""

import re
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
from typing import Optional, Union

import pandas as pd
import structlog

from config.units import (
    DEFAULT_BASE_QUANTITY_PER_UNIT,
    normalize_base_unit,
    normalize_container_unit,
)
from exceptions import SupplyCSVParseError
from models.supply_request import RequestMethod, SupplyLineItem
from utils.text_utils import clean_cell_value

logger = structlog.get_logger(__name__)


# Each alias is also tried lowercased and uppercased
PRODUCT_NAME_COLUMNS = ["productName", "product_name", "Product Name", "name", "itemName"]
QUANTITY_COLUMNS = ["quantity", "Quantity", "qty"]
CLOSING_STOCK_COLUMNS = ["closingStock", "closing_stock", "Closing Stock"]
OPENING_STOCK_COLUMNS = ["openingStock", "opening_stock", "Opening Stock"]
UNIT_PRICE_COLUMNS = ["unitPrice", "unit_price", "Unit Price", "price"]
CONTAINER_UNIT_COLUMNS = ["unitOfMeasurement", "unit_of_measurement", "Unit Of Measurement", "unit"]
BASE_UNIT_COLUMNS = ["baseUnit", "base_unit", "Base Unit"]
BASE_QUANTITY_COLUMNS = [
    "baseQuantityPerUnit", "base_quantity_per_unit", "Base Quantity Per Unit", "baseQtyPerUnit",
]
VENDOR_COLUMNS = ["vendorId", "vendor_id", "Vendor ID", "vendor"]
NOTE_COLUMNS = ["specialNote", "special_note", "Special Note", "note", "notes"]
NOTE_MAX_LENGTH = 1000

_LEADING_INT = re.compile(r"^[+-]?\d+")
_LEADING_FLOAT = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


@dataclass
class SupplyCSVParseResult:
    """Result of parsing a supply CSV."""
    items: list[SupplyLineItem] = field(default_factory=list)
    skipped_rows: list[int] = field(default_factory=list)
    total_rows: int = 0

    @property
    def has_data(self) -> bool:
        return len(self.items) > 0

    @property
    def missing_vendor_count(self) -> int:
        return sum(1 for item in self.items if not item.has_vendor)


def parse_supply_csv(file: Union[str, Path, BytesIO, bytes]) -> SupplyCSVParseResult:
    """
    Parse a bulk supply CSV into line items.

    Rows without a product name are skipped. Quantity falls back to the
    larger of closing/opening stock (at least 1) when missing or not
    positive, which is what an inventory export provides.

    Args:
        file: File path, raw bytes, or file-like object

    Returns:
        SupplyCSVParseResult with line items in row order (not reconciled)

    Raises:
        SupplyCSVParseError: If the file cannot be read or no row has a product name
    """
    logger.info("parsing_supply_csv", file_type=type(file).__name__)

    if isinstance(file, bytes):
        file = BytesIO(file)

    try:
        df = pd.read_csv(
            file,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding="utf-8-sig",
        )
    except pd.errors.EmptyDataError:
        raise SupplyCSVParseError(message="CSV file is empty")
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        logger.error("supply_csv_read_failed", error=str(e))
        raise SupplyCSVParseError(
            message="Failed to parse CSV file. Please check the file format.",
            details={"original_error": str(e)}
        )

    result = SupplyCSVParseResult(total_rows=len(df))

    for idx, row in enumerate(df.to_dict(orient="records")):
        row_num = idx + 2  # CSV row (1-indexed + header)
        item = _row_to_line_item(row)
        if item is None:
            result.skipped_rows.append(row_num)
            continue
        result.items.append(item)

    if not result.has_data:
        logger.warning("supply_csv_no_valid_rows", total_rows=result.total_rows)
        raise SupplyCSVParseError(
            message="No valid items found in CSV. Please check the file format.",
            details={"total_rows": result.total_rows, "skipped_rows": result.skipped_rows}
        )

    logger.info(
        "supply_csv_parsed",
        item_count=len(result.items),
        skipped_count=len(result.skipped_rows),
        missing_vendor_count=result.missing_vendor_count,
    )

    return result


def _row_to_line_item(row: dict) -> Optional[SupplyLineItem]:
    """Map one CSV record to a line item, or None if it has no product name."""
    product_name = _get_value(row, PRODUCT_NAME_COLUMNS)
    if not product_name:
        return None

    quantity = _parse_leading_int(_get_value(row, QUANTITY_COLUMNS))
    if quantity is None or quantity <= 0:
        closing_stock = _parse_leading_float(_get_value(row, CLOSING_STOCK_COLUMNS)) or 0
        opening_stock = _parse_leading_float(_get_value(row, OPENING_STOCK_COLUMNS)) or 0
        quantity = max(closing_stock, opening_stock, 1)

    unit_price = _parse_leading_float(_get_value(row, UNIT_PRICE_COLUMNS)) or 0

    base_quantity = _parse_leading_float(_get_value(row, BASE_QUANTITY_COLUMNS))
    if not base_quantity or base_quantity <= 0:
        base_quantity = DEFAULT_BASE_QUANTITY_PER_UNIT

    return SupplyLineItem(
        product_name=product_name,
        quantity=float(quantity),
        unit_of_measurement=normalize_container_unit(_get_value(row, CONTAINER_UNIT_COLUMNS)),
        unit_price=max(unit_price, 0),
        base_unit=normalize_base_unit(_get_value(row, BASE_UNIT_COLUMNS)),
        base_quantity_per_unit=base_quantity,
        vendor_id=_get_value(row, VENDOR_COLUMNS) or None,
        special_note=_get_value(row, NOTE_COLUMNS, max_length=NOTE_MAX_LENGTH) or None,
        request_method=RequestMethod.BULK,
    )


def _get_value(row: dict, keys: list[str], max_length: int = 255) -> str:
    """First non-empty cell among the aliases (as written, lower, upper)."""
    for key in keys:
        for candidate in (key, key.lower(), key.upper()):
            value = clean_cell_value(row.get(candidate), max_length=max_length)
            if value:
                return value
    return ""


def _parse_leading_int(value: str) -> Optional[int]:
    """
    Integer prefix of a cell: "12" -> 12, "5.7" -> 5, "3 bags" -> 3.

    Returns None when the cell does not start with a number.
    """
    match = _LEADING_INT.match(value.strip())
    return int(match.group(0)) if match else None


def _parse_leading_float(value: str) -> Optional[float]:
    """Numeric prefix of a cell: "12.5" -> 12.5, "N/A" -> None."""
    match = _LEADING_FLOAT.match(value.strip())
    return float(match.group(0)) if match else None
