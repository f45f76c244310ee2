# Storefront services

from .api_client import StorefrontClient
from .auth import AuthManager
from .cart_store import CartStore
from .checkout import CheckoutService
from .coupons import AppliedCoupon, CouponValidator
from .pricing import CartTotals, CheckoutSummary, PricingConfig
from .sync import NetworkErrorPolicy, OperationResult, RetryPolicy, SyncState
from .wishlist_store import WishlistStore

__all__ = [
    "StorefrontClient",
    "AuthManager",
    "CartStore",
    "CheckoutService",
    "AppliedCoupon",
    "CouponValidator",
    "CartTotals",
    "CheckoutSummary",
    "PricingConfig",
    "NetworkErrorPolicy",
    "OperationResult",
    "RetryPolicy",
    "SyncState",
    "WishlistStore",
]
