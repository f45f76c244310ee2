# Mock backend models

from .auth import LoginRequest, LogoutRequest, RefreshTokenRequest
from .cart import AddToCartRequest, CartEntry, UpdateCartItemRequest
from .order import CreateOrderRequest, Order, OrderItem, OrderStatus, ShippingAddress
from .product import Product
from .promotion import DiscountType, Promotion, VerifyCouponRequest
from .user import User
from .wishlist import AddToWishlistRequest, WishlistEntry

__all__ = [
    "LoginRequest",
    "LogoutRequest",
    "RefreshTokenRequest",
    "AddToCartRequest",
    "CartEntry",
    "UpdateCartItemRequest",
    "CreateOrderRequest",
    "Order",
    "OrderItem",
    "OrderStatus",
    "ShippingAddress",
    "Product",
    "DiscountType",
    "Promotion",
    "VerifyCouponRequest",
    "User",
    "AddToWishlistRequest",
    "WishlistEntry",
]
