"""Order models for mock backend"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"


class ShippingAddress(BaseModel):
    """Shipping address; required fields are checked by the route"""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    line1: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None


class OrderItem(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    product_id: str
    quantity: int = Field(gt=0)
    price: float = Field(ge=0)
    size: Optional[str] = None
    color: Optional[str] = None


class CreateOrderRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    shipping_address: ShippingAddress = ShippingAddress()
    payment_method: str = "credit-card"
    items: list[OrderItem] = []
    subtotal: float = 0
    shipping_cost: float = 0
    tax: float = 0
    total: float = 0
    coupon_code: Optional[str] = None


class Order(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(serialization_alias="_id")
    user_id: str
    items: list[OrderItem]
    shipping_address: ShippingAddress
    payment_method: str
    subtotal: float
    shipping_cost: float
    tax: float
    total: float
    coupon_code: Optional[str] = None
    status: OrderStatus = OrderStatus.CONFIRMED
    created_at: datetime

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
