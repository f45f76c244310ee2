"""Storefront client errors"""

from typing import Any, Optional


class StorefrontError(Exception):
    """Base exception for storefront client errors"""

    default_message = "Something went wrong. Please try again."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NetworkError(StorefrontError):
    """Connectivity failure talking to the storefront API"""

    default_message = "Network error. Please check your connection and try again."


class NetworkConnectionError(NetworkError):
    """The API could not be reached"""

    default_message = "Unable to reach the server. Please check your connection."


class NetworkTimeoutError(NetworkError):
    """The API did not answer in time"""

    default_message = "The request timed out. Please try again."


class ServerError(StorefrontError):
    """Non-2xx (or success: false) response from the API"""

    default_message = "Server error. Please try again later."

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        payload: Optional[Any] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class AuthenticationError(ServerError):
    """Session expired or credentials rejected"""

    default_message = "Your session has expired. Please log in again."


class InvalidCouponError(ServerError):
    """Coupon rejected by the verification endpoint"""

    default_message = "Invalid coupon code"


class ValidationError(StorefrontError):
    """Client-side precondition failed"""

    default_message = "Invalid input"


class MinimumPurchaseError(ValidationError):
    """Subtotal is below the coupon's minimum purchase amount"""

    def __init__(self, minimum_purchase: float, currency_symbol: str = "₹"):
        self.minimum_purchase = minimum_purchase
        super().__init__(
            f"Minimum purchase of {currency_symbol}{minimum_purchase:.2f} "
            "required for this coupon"
        )


class NotFoundError(StorefrontError):
    """Expected local item is missing"""

    default_message = "Item not found"
