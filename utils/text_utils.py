"""
Text utilities for CSV cells and user-facing messages.
"""

import math
from typing import Any, Optional


def clean_cell_value(value: Any, max_length: int = 255) -> Optional[str]:
    """
    Clean a raw spreadsheet cell for use as text.

    - None / NaN -> None
    - Strips whitespace
    - Truncates to max length
    - Returns None for empty/whitespace-only strings

    Args:
        value: Raw cell (str, number, None)
        max_length: Maximum characters to keep

    Returns:
        Cleaned text or None
    """
    if value is None:
        return None

    if isinstance(value, float) and math.isnan(value):
        return None

    text = str(value).strip()

    if not text:
        return None

    if len(text) > max_length:
        text = text[:max_length]

    return text


def pluralize(count: int, noun: str) -> str:
    """
    Format a count with its noun.

    - pluralize(1, "item") -> "1 item"
    - pluralize(3, "supply request") -> "3 supply requests"
    """
    return f"{count} {noun}{'' if count == 1 else 's'}"
