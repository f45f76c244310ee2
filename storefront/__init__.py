"""
Storefront client state

Cart, wishlist, coupon and checkout state for the storefront, kept in a
local snapshot while signed out and synced with the REST backend while
signed in.
"""

from .core import Settings, StorefrontSession, get_settings
from .errors import StorefrontError

__all__ = ["Settings", "StorefrontSession", "StorefrontError", "get_settings"]
