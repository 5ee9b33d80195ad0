"""
Line-item reconciliation shared by every supply wizard.

New supply (manual + CSV), resupply and template-apply all fold duplicate
products together with the same rule before anything is submitted:

    same key = lowercase(product name) | container unit | base unit
    quantity    -> summed
    unit price  -> highest seen
    special note -> first non-empty
    everything else -> kept from the first occurrence

All functions are pure: inputs are never mutated.
"""

from typing import Sequence, TypeVar

from models.supply_request import SupplyLineItem

T = TypeVar("T", bound=SupplyLineItem)


def identity_key(item: SupplyLineItem) -> str:
    """Key under which two line items count as the same request."""
    return f"{item.product_name.lower()}|{item.unit_of_measurement}|{item.base_unit}"


def merge_line_items(first: T, other: SupplyLineItem) -> T:
    """
    Fold `other` into `first`.

    Only quantity, unit price and special note change; base quantity per
    unit is never summed.
    """
    return first.model_copy(update={
        "quantity": first.quantity + other.quantity,
        "unit_price": max(first.unit_price, other.unit_price),
        "special_note": first.special_note or other.special_note,
    })


def reconcile(items: Sequence[T]) -> list[T]:
    """
    Merge line items that share an identity key.

    Args:
        items: Line items in entry order (form order or CSV row order)

    Returns:
        One item per key, ordered by first occurrence
    """
    merged: dict[str, T] = {}
    for item in items:
        key = identity_key(item)
        if key in merged:
            merged[key] = merge_line_items(merged[key], item)
        else:
            merged[key] = item.model_copy()
    return list(merged.values())


def count_merged(before: Sequence[SupplyLineItem], after: Sequence[SupplyLineItem]) -> int:
    """How many input items were folded into an earlier one."""
    return len(before) - len(after)


def merge_edited_item(items: Sequence[T], index: int, updated: T) -> tuple[list[T], bool]:
    """
    Apply an edit to one line item.

    If another item already has the edited item's key, the edit is folded
    into that item (it keeps its position) and the edited slot is dropped.
    Otherwise the item is replaced in place.

    Args:
        items: Current wizard state
        index: Position being edited (must be in range)
        updated: New value for that position

    Returns:
        (new item list, True if a merge happened)
    """
    key = identity_key(updated)
    target = next(
        (i for i, existing in enumerate(items) if i != index and identity_key(existing) == key),
        None,
    )

    result = [item.model_copy() for item in items]
    if target is None:
        result[index] = updated.model_copy()
        return result, False

    result[target] = merge_line_items(result[target], updated)
    del result[index]
    return result, True
