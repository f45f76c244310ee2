"""Cart storage for mock backend"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from ..models.cart import CartEntry


class CartDatabase:
    """In-memory carts keyed by user id"""

    def __init__(self):
        self.carts: dict[str, list[CartEntry]] = {}

    def get_items(self, user_id: str) -> list[CartEntry]:
        return self.carts.setdefault(user_id, [])

    def find_entry(self, user_id: str, entry_id: str) -> Optional[CartEntry]:
        return next((e for e in self.get_items(user_id) if e.id == entry_id), None)

    def find_variant(
        self,
        user_id: str,
        product_id: str,
        size: Optional[str],
        color: Optional[str],
    ) -> Optional[CartEntry]:
        return next(
            (
                e
                for e in self.get_items(user_id)
                if e.product_id == product_id and e.size == size and e.color == color
            ),
            None,
        )

    def add_item(
        self,
        user_id: str,
        product_id: str,
        quantity: int,
        size: Optional[str] = None,
        color: Optional[str] = None,
    ) -> CartEntry:
        """Add a line, merging into an existing (product, size, color) line"""
        items = self.get_items(user_id)
        existing = self.find_variant(user_id, product_id, size, color)

        if existing:
            merged = existing.model_copy(update={"quantity": existing.quantity + quantity})
            items[items.index(existing)] = merged
            return merged

        entry = CartEntry(
            id=str(uuid.uuid4()),
            product_id=product_id,
            quantity=quantity,
            size=size,
            color=color,
            added_at=datetime.now(timezone.utc),
        )
        items.append(entry)
        return entry

    def update_quantity(self, user_id: str, entry_id: str, quantity: int) -> Optional[CartEntry]:
        items = self.get_items(user_id)
        entry = self.find_entry(user_id, entry_id)
        if not entry:
            return None

        updated = entry.model_copy(update={"quantity": quantity})
        items[items.index(entry)] = updated
        return updated

    def remove_item(self, user_id: str, entry_id: str) -> bool:
        items = self.get_items(user_id)
        entry = self.find_entry(user_id, entry_id)
        if not entry:
            return False

        items.remove(entry)
        return True

    def clear(self, user_id: str) -> None:
        self.carts[user_id] = []
