"""Promotion models for mock backend"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class Promotion(BaseModel):
    """Coupon-backed promotion"""
    code: str
    name: str
    discount_type: DiscountType
    discount_value: float = Field(ge=0)
    minimum_purchase: float = 0
    usage_limit: Optional[int] = None
    usage_count: int = 0
    active: bool = True
    start_date: datetime
    end_date: datetime

    def is_valid_at(self, moment: datetime) -> bool:
        return self.active and self.start_date <= moment <= self.end_date

    @property
    def exhausted(self) -> bool:
        return self.usage_limit is not None and self.usage_count >= self.usage_limit

    def to_coupon(self) -> dict:
        return {
            "code": self.code,
            "name": self.name,
            "discountType": self.discount_type.value,
            "discountValue": self.discount_value,
            "minimumPurchase": self.minimum_purchase,
        }


class VerifyCouponRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    coupon_code: Optional[str] = None
