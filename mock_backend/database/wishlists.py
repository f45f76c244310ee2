"""Wishlist storage for mock backend"""

import uuid
from datetime import datetime, timezone

from ..models.wishlist import WishlistEntry


class WishlistDatabase:
    """In-memory wishlists keyed by user id"""

    def __init__(self):
        self.wishlists: dict[str, list[WishlistEntry]] = {}

    def get_items(self, user_id: str) -> list[WishlistEntry]:
        return self.wishlists.setdefault(user_id, [])

    def add_item(self, user_id: str, product_id: str) -> WishlistEntry:
        """Add a product once; repeated adds return the existing entry"""
        items = self.get_items(user_id)
        existing = next((e for e in items if e.product_id == product_id), None)
        if existing:
            return existing

        entry = WishlistEntry(
            id=str(uuid.uuid4()),
            product_id=product_id,
            added_at=datetime.now(timezone.utc),
        )
        items.append(entry)
        return entry

    def remove_item(self, user_id: str, item_id: str) -> bool:
        """Remove by entry id, or by product id for clients that only know that"""
        items = self.get_items(user_id)
        entry = next(
            (e for e in items if e.id == item_id or e.product_id == item_id),
            None,
        )
        if not entry:
            return False

        items.remove(entry)
        return True

    def clear(self, user_id: str) -> None:
        self.wishlists[user_id] = []
