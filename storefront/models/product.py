"""Product snapshot carried by cart lines and wishlist entries"""

import math
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


def coerce_price(value: Any) -> float:
    """Parse a price, falling back to 0 for anything non-numeric or negative"""
    if isinstance(value, bool):
        return 0.0
    try:
        price = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(price) or price < 0:
        return 0.0
    return price


class ProductSnapshot(BaseModel):
    """Denormalized product fields the client needs to render and price an item"""

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    id: str = Field(validation_alias=AliasChoices("id", "_id", "productId"))
    name: str = Field(default="", validation_alias=AliasChoices("name", "title"))
    price: float = 0.0
    image: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _first_image(cls, data: Any) -> Any:
        # API documents carry an `images` list; keep the first as the thumbnail
        if isinstance(data, dict) and not data.get("image") and data.get("images"):
            data = dict(data)
            data["image"] = data["images"][0]
        return data

    @model_validator(mode="before")
    @classmethod
    def _sale_price(cls, data: Any) -> Any:
        # A positive sale price is the price the shopper pays
        if isinstance(data, dict) and data.get("salePrice") is not None:
            sale_price = coerce_price(data["salePrice"])
            if sale_price > 0:
                data = {**data, "price": sale_price}
        return data

    @field_validator("price", mode="before")
    @classmethod
    def _coerce_price(cls, value: Any) -> float:
        return coerce_price(value)
