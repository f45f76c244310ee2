# Storefront Models

from .product import ProductSnapshot
from .cart import LineItem, LineKey, parse_quantity, coerce_quantity
from .coupon import Coupon, DiscountType
from .wishlist import WishlistItem
from .auth import AuthTokens, UserProfile
from .checkout import ShippingAddress, OrderItem, OrderRequest, PaymentMethod

__all__ = [
    "ProductSnapshot",
    "LineItem",
    "LineKey",
    "parse_quantity",
    "coerce_quantity",
    "Coupon",
    "DiscountType",
    "WishlistItem",
    "AuthTokens",
    "UserProfile",
    "ShippingAddress",
    "OrderItem",
    "OrderRequest",
    "PaymentMethod",
]
