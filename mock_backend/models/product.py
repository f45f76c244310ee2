"""Product models for mock backend"""

from typing import Optional

from pydantic import BaseModel, Field


class Product(BaseModel):
    """Catalog product"""
    id: str
    title: str
    price: float = Field(ge=0)
    sale_price: Optional[float] = Field(default=None, ge=0)
    images: list[str] = []
    stock: int = Field(default=0, ge=0)
    category: str = "apparel"
    sizes: list[str] = []
    colors: list[str] = []

    def to_document(self) -> dict:
        """Shape used when a product is populated into a cart or wishlist entry"""
        return {
            "_id": self.id,
            "title": self.title,
            "price": self.price,
            "salePrice": self.sale_price,
            "images": list(self.images),
            "stock": self.stock,
        }
