"""Wishlist models for mock backend"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .product import Product


class WishlistEntry(BaseModel):
    id: str
    product_id: str
    added_at: datetime

    def to_document(self, product: Optional[Product]) -> dict:
        return {
            "_id": self.id,
            "productId": product.to_document() if product else self.product_id,
            "addedAt": self.added_at.isoformat(),
        }


class AddToWishlistRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    product_id: Optional[str] = None
