"""Cart models for mock backend"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .product import Product


class CartEntry(BaseModel):
    """One line of a user's server-side cart"""
    id: str
    product_id: str
    quantity: int = Field(gt=0)
    size: Optional[str] = None
    color: Optional[str] = None
    added_at: datetime

    def to_document(self, product: Optional[Product]) -> dict:
        return {
            "_id": self.id,
            "productId": product.to_document() if product else self.product_id,
            "quantity": self.quantity,
            "size": self.size,
            "color": self.color,
            "addedAt": self.added_at.isoformat(),
        }


class AddToCartRequest(BaseModel):
    """Request to add item to cart"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    product_id: str
    quantity: int = Field(default=1, gt=0)
    size: Optional[str] = None
    color: Optional[str] = None


class UpdateCartItemRequest(BaseModel):
    """Request to update cart item quantity"""
    quantity: int = Field(gt=0)
