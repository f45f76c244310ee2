"""Coupon verification"""

import logging
from dataclasses import dataclass

import pydantic

from ..errors import (
    AuthenticationError,
    InvalidCouponError,
    MinimumPurchaseError,
    ServerError,
    ValidationError,
)
from ..models.coupon import Coupon
from .api_client import StorefrontClient
from .pricing import coupon_discount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppliedCoupon:
    """Coupon accepted against a given subtotal"""
    coupon: Coupon
    discount_amount: float

    def to_dict(self) -> dict:
        return {
            "discount_amount": self.discount_amount,
            "discount_type": self.coupon.discount_type.value,
            "discount_value": self.coupon.discount_value,
        }


class CouponValidator:
    """
    Validates coupon codes against the promotions endpoint.

    The minimum-purchase rule is enforced here, after the server has
    accepted the code.
    """

    def __init__(self, client: StorefrontClient, currency_symbol: str = "₹"):
        self.client = client
        self.currency_symbol = currency_symbol

    async def validate(self, code: str, subtotal: float) -> AppliedCoupon:
        """
        Verify `code` and compute its discount for `subtotal`.

        Raises:
            ValidationError: empty code
            InvalidCouponError: rejected by the server
            MinimumPurchaseError: subtotal below the coupon's minimum
            NetworkError: the endpoint could not be reached
        """
        code = (code or "").strip()
        if not code:
            raise ValidationError("Please enter a coupon code")

        try:
            payload = await self.client.verify_coupon(code)
        except (InvalidCouponError, AuthenticationError):
            raise
        except ServerError as e:
            raise InvalidCouponError(e.message, status_code=e.status_code, payload=e.payload) from e

        data = payload.get("data") or {}
        try:
            coupon = Coupon(
                code=code,
                discount_type=data.get("discountType"),
                discount_value=data.get("discountValue"),
                minimum_purchase=data.get("minimumPurchase"),
            )
        except pydantic.ValidationError as e:
            logger.error(f"Malformed coupon response for {code}: {e}")
            raise InvalidCouponError(payload=payload) from e

        if coupon.minimum_purchase is not None and subtotal < coupon.minimum_purchase:
            raise MinimumPurchaseError(coupon.minimum_purchase, self.currency_symbol)

        applied = AppliedCoupon(coupon=coupon, discount_amount=coupon_discount(subtotal, coupon))
        logger.info(f"Coupon {code} accepted: discount {applied.discount_amount}")
        return applied
