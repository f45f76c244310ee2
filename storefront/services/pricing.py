"""Cart and checkout pricing"""

from dataclasses import dataclass
from typing import Optional, Union

from ..core.config import Settings
from ..models.cart import LineItem
from ..models.coupon import Coupon, DiscountType


@dataclass(frozen=True)
class PricingConfig:
    """Checkout business rules"""
    free_shipping_threshold: float = 100.0
    flat_shipping_fee: float = 10.0
    tax_rate: float = 0.07

    @classmethod
    def from_settings(cls, settings: Settings) -> "PricingConfig":
        return cls(
            free_shipping_threshold=settings.free_shipping_threshold,
            flat_shipping_fee=settings.flat_shipping_fee,
            tax_rate=settings.tax_rate,
        )


@dataclass(frozen=True)
class CartTotals:
    subtotal: float
    discount: float
    total: float


@dataclass(frozen=True)
class CheckoutSummary:
    subtotal: float
    discount: float
    shipping: float
    tax: float
    grand_total: float


def calculate_subtotal(lines: list[LineItem]) -> float:
    return sum((line.unit_price * line.quantity for line in lines), 0.0)


def compute_discount(
    subtotal: float,
    discount_type: Union[DiscountType, str],
    discount_value: float,
) -> float:
    """Coupon discount, clamped to [0, subtotal]"""
    if DiscountType(discount_type) is DiscountType.PERCENTAGE:
        discount = subtotal * discount_value / 100
    else:
        discount = discount_value
    return max(0.0, min(subtotal, discount))


def coupon_discount(subtotal: float, coupon: Optional[Coupon]) -> float:
    if coupon is None:
        return 0.0
    return compute_discount(subtotal, coupon.discount_type, coupon.discount_value)


def calculate_cart_totals(lines: list[LineItem], coupon: Optional[Coupon] = None) -> CartTotals:
    subtotal = calculate_subtotal(lines)
    discount = coupon_discount(subtotal, coupon)
    return CartTotals(subtotal=subtotal, discount=discount, total=subtotal - discount)


def calculate_checkout(
    lines: list[LineItem],
    coupon: Optional[Coupon] = None,
    config: Optional[PricingConfig] = None,
) -> CheckoutSummary:
    """
    Checkout summary: shipping is free above the threshold and tax applies
    to the pre-discount subtotal. Values are not rounded.
    """
    config = config or PricingConfig()
    totals = calculate_cart_totals(lines, coupon)
    shipping = 0.0 if totals.subtotal > config.free_shipping_threshold else config.flat_shipping_fee
    tax = totals.subtotal * config.tax_rate

    return CheckoutSummary(
        subtotal=totals.subtotal,
        discount=totals.discount,
        shipping=shipping,
        tax=tax,
        grand_total=totals.subtotal - totals.discount + shipping + tax,
    )


def format_amount(amount: float, currency_symbol: str = "₹") -> str:
    """Display rounding only"""
    return f"{currency_symbol}{amount:.2f}"
