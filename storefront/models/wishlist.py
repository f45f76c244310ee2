"""Wishlist models"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .cart import utcnow
from .product import ProductSnapshot


class WishlistItem(BaseModel):
    """Saved product, unique per product_id"""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    product_id: str
    item_id: Optional[str] = None  # remote wishlist entry id
    product: ProductSnapshot
    added_at: datetime = Field(default_factory=utcnow)

    @classmethod
    def from_product(cls, product: ProductSnapshot) -> "WishlistItem":
        return cls(product_id=product.id, product=product, added_at=utcnow())

    @classmethod
    def from_remote(cls, entry: dict[str, Any]) -> "WishlistItem":
        """Build an entry from a `/wishlist` response item"""
        product = entry.get("productId")
        if isinstance(product, dict):
            snapshot = ProductSnapshot.model_validate(product)
        else:
            snapshot = ProductSnapshot.model_validate({"id": product})

        return cls(
            product_id=snapshot.id,
            item_id=entry.get("_id"),
            product=snapshot,
            added_at=entry.get("addedAt") or utcnow(),
        )
