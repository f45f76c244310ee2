"""Coupon models"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class Coupon(BaseModel):
    """Active coupon; at most one per cart"""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    code: str
    discount_type: DiscountType
    discount_value: float = Field(ge=0)
    minimum_purchase: Optional[float] = Field(default=None, ge=0)
