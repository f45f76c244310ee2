"""Cart line items"""

import math
import re
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .product import ProductSnapshot, coerce_price

LineKey = tuple[str, Optional[str], Optional[str]]

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_quantity(value: Any) -> Optional[int]:
    """
    Parse a quantity as a base-10 integer.

    Floats are truncated and strings are read up to the first non-digit.
    Returns None when nothing numeric can be read.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _INT_PREFIX.match(value)
        return int(match.group(1), 10) if match else None
    return None


def coerce_quantity(value: Any) -> int:
    """Quantity as a positive integer, defaulting to 1"""
    # Lines are coerced once when built, so a bad stored quantity prices
    # as 1 rather than being counted as 0 in the subtotal.
    quantity = parse_quantity(value)
    if quantity is None or quantity < 1:
        return 1
    return quantity


class LineItem(BaseModel):
    """One cart entry, unique per (product_id, size, color)"""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    product_id: str
    cart_entry_id: Optional[str] = None  # assigned by the remote cart
    name: str = ""
    unit_price: float = 0.0
    image_ref: Optional[str] = None
    quantity: int = 1
    size: Optional[str] = None
    color: Optional[str] = None
    added_at: datetime = Field(default_factory=utcnow)

    @field_validator("unit_price", mode="before")
    @classmethod
    def _coerce_price(cls, value: Any) -> float:
        return coerce_price(value)

    @field_validator("quantity", mode="before")
    @classmethod
    def _coerce_quantity(cls, value: Any) -> int:
        return coerce_quantity(value)

    @field_validator("size", "color", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def key(self) -> LineKey:
        return (self.product_id, self.size, self.color)

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity

    def matches(
        self,
        product_id: str,
        size: Optional[str] = None,
        color: Optional[str] = None,
    ) -> bool:
        """Partial match: size/color only filter when given"""
        return (
            self.product_id == product_id
            and (size is None or self.size == size)
            and (color is None or self.color == color)
        )

    @classmethod
    def from_product(
        cls,
        product: ProductSnapshot,
        quantity: int = 1,
        size: Optional[str] = None,
        color: Optional[str] = None,
    ) -> "LineItem":
        return cls(
            product_id=product.id,
            name=product.name,
            unit_price=product.price,
            image_ref=product.image,
            quantity=quantity,
            size=size,
            color=color,
            added_at=utcnow(),
        )

    @classmethod
    def from_remote(cls, entry: dict[str, Any]) -> "LineItem":
        """Build a line from a `/cart` response entry"""
        product = entry.get("productId")
        details = {k: v for k, v in (entry.get("productDetails") or {}).items() if v is not None}
        if isinstance(product, dict):
            snapshot = ProductSnapshot.model_validate({**product, **details})
        else:
            snapshot = ProductSnapshot.model_validate({**details, "id": product})

        return cls(
            product_id=snapshot.id,
            cart_entry_id=entry.get("_id"),
            name=snapshot.name,
            unit_price=snapshot.price,
            image_ref=snapshot.image,
            quantity=entry.get("quantity"),
            size=entry.get("size"),
            color=entry.get("color"),
            added_at=entry.get("addedAt") or entry.get("createdAt") or utcnow(),
        )
