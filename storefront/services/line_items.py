"""
Line-item merge rules.

Pure functions over lists of LineItem; each returns a new list and leaves
its input untouched. Adding matches exactly on (product_id, size, color),
while removing treats a missing size or color as a wildcard.
"""

from typing import Any, Optional, Union

from ..models.cart import LineItem, LineKey, coerce_quantity, parse_quantity
from ..models.product import ProductSnapshot

__all__ = [
    "add_line",
    "coerce_quantity",
    "find_line",
    "item_count",
    "matching_lines",
    "parse_quantity",
    "remove_line",
    "set_quantity",
]


def find_line(lines: list[LineItem], key: LineKey) -> Optional[int]:
    """Index of the line whose key equals `key` exactly"""
    return next((i for i, line in enumerate(lines) if line.key == key), None)


def matching_lines(
    lines: list[LineItem],
    product_id: str,
    size: Optional[str] = None,
    color: Optional[str] = None,
) -> list[LineItem]:
    return [line for line in lines if line.matches(product_id, size, color)]


def add_line(
    lines: list[LineItem],
    product: Union[ProductSnapshot, dict],
    quantity: Any = 1,
    size: Optional[str] = None,
    color: Optional[str] = None,
) -> list[LineItem]:
    """Add a product, merging into the line with the same (product, size, color)"""
    if not isinstance(product, ProductSnapshot):
        product = ProductSnapshot.model_validate(product)
    quantity = coerce_quantity(quantity)

    candidate = LineItem.from_product(product, quantity, size, color)
    index = find_line(lines, candidate.key)
    if index is not None:
        existing = lines[index]
        return set_quantity(lines, existing.key, existing.quantity + quantity)

    return [*lines, candidate]


def remove_line(
    lines: list[LineItem],
    product_id: str,
    size: Optional[str] = None,
    color: Optional[str] = None,
) -> list[LineItem]:
    """Drop every line matching the product; size/color narrow only when given"""
    return [line for line in lines if not line.matches(product_id, size, color)]


def set_quantity(lines: list[LineItem], key: LineKey, quantity: Any) -> list[LineItem]:
    """Set one line's quantity; non-positive or unparseable values remove it"""
    parsed = parse_quantity(quantity)
    if parsed is None or parsed <= 0:
        return remove_line(lines, *key)

    return [
        line.model_copy(update={"quantity": parsed}) if line.key == key else line
        for line in lines
    ]


def item_count(lines: list[LineItem]) -> int:
    return sum(line.quantity for line in lines)
