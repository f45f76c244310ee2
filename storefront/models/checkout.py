"""Checkout models"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PaymentMethod(str, Enum):
    CREDIT_CARD = "credit-card"
    PAYPAL = "paypal"


class ShippingAddress(BaseModel):
    """Shipping address for an order"""

    model_config = ConfigDict(str_strip_whitespace=True)

    line1: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip: str = Field(min_length=1)
    country: str = Field(min_length=1)
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class OrderItem(BaseModel):
    """Line of an order payload"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    product_id: str
    quantity: int
    price: float
    size: Optional[str] = None
    color: Optional[str] = None


class OrderRequest(BaseModel):
    """Body of `POST /orders`"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    shipping_address: ShippingAddress
    payment_method: PaymentMethod
    items: list[OrderItem]
    subtotal: float
    shipping_cost: float
    tax: float
    total: float
    coupon_code: Optional[str] = None

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
