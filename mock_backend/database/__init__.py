# In-memory databases for the mock backend

from dataclasses import dataclass, field

from .carts import CartDatabase
from .orders import OrderDatabase
from .products import ProductDatabase
from .promotions import PromotionDatabase
from .users import UserDatabase
from .wishlists import WishlistDatabase


@dataclass
class MockDatabase:
    """All stores for one app instance; tests get a fresh one per app"""
    products: ProductDatabase = field(default_factory=ProductDatabase)
    users: UserDatabase = field(default_factory=UserDatabase)
    carts: CartDatabase = field(default_factory=CartDatabase)
    wishlists: WishlistDatabase = field(default_factory=WishlistDatabase)
    promotions: PromotionDatabase = field(default_factory=PromotionDatabase)
    orders: OrderDatabase = field(default_factory=OrderDatabase)


__all__ = [
    "MockDatabase",
    "CartDatabase",
    "OrderDatabase",
    "ProductDatabase",
    "PromotionDatabase",
    "UserDatabase",
    "WishlistDatabase",
]
