# API routes

from .auth import router as auth_router
from .cart import router as cart_router
from .orders import router as orders_router
from .products import router as products_router
from .promotions import router as promotions_router
from .wishlist import router as wishlist_router

__all__ = [
    "auth_router",
    "cart_router",
    "orders_router",
    "products_router",
    "promotions_router",
    "wishlist_router",
]
