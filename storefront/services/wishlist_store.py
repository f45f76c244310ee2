"""Wishlist state container"""

import logging
from typing import Optional, Union

from ..errors import NotFoundError
from ..models.product import ProductSnapshot
from ..models.wishlist import WishlistItem
from ..storage.local_store import LocalStore
from .api_client import StorefrontClient
from .sync import NetworkErrorPolicy, OperationResult, RetryPolicy, SyncedCollection

logger = logging.getLogger(__name__)


class WishlistStore(SyncedCollection[WishlistItem]):
    """
    Saved products, one entry per product.

    Remote calls retry network errors with backoff, and an add that still
    cannot reach the server is kept locally.
    """

    storage_key = "wishlist"
    item_model = WishlistItem

    def __init__(
        self,
        client: StorefrontClient,
        storage: LocalStore,
        network_error_policy: NetworkErrorPolicy = NetworkErrorPolicy.OPTIMISTIC_LOCAL,
        retry_policy: Optional[RetryPolicy] = None,
    ):
        super().__init__(
            client,
            storage,
            network_error_policy,
            retry_policy or RetryPolicy(max_retries=3, initial_delay=1.0),
        )

    async def _fetch_remote(self) -> dict:
        return await self.client.get_wishlist()

    def _parse_remote(self, payload: dict) -> list[WishlistItem]:
        data = payload.get("data") or []
        if isinstance(data, dict):
            data = data.get("items") or []
        return [WishlistItem.from_remote(entry) for entry in self._resolvable(data)]

    def contains(self, product_id: str) -> bool:
        return any(item.product_id == product_id for item in self.items)

    def _find(self, product_id: str) -> Optional[WishlistItem]:
        return next((item for item in self.items if item.product_id == product_id), None)

    @property
    def item_count(self) -> int:
        return len(self.items)

    async def add_item(self, product: Union[ProductSnapshot, dict]) -> OperationResult:
        """Save a product; adding one already saved is a no-op"""
        if not isinstance(product, ProductSnapshot):
            product = ProductSnapshot.model_validate(product)

        def append_locally() -> list[WishlistItem]:
            if self.contains(product.id):
                return self.items
            return [*self.items, WishlistItem.from_product(product)]

        if not self.is_remote:
            self._set_items(append_locally())
            return OperationResult(success=True, data=self.items)

        return await self._run_remote(
            lambda: self.client.add_wishlist_item(product.id),
            optimistic=append_locally,
        )

    async def remove_item(self, product_id: str) -> OperationResult:
        if not self.is_remote:
            self._set_items([item for item in self.items if item.product_id != product_id])
            return OperationResult(success=True, data=self.items)

        item = self._find(product_id)
        if item is None:
            return self._fail(NotFoundError("Item not found in wishlist"))

        return await self._run_remote(
            lambda: self.client.remove_wishlist_item(item.item_id or item.product_id)
        )

    async def clear(self) -> OperationResult:
        if not self.is_remote:
            self._set_items([])
            return OperationResult(success=True, data=self.items)

        return await self._run_remote(self.client.clear_wishlist)

    def on_logout(self) -> None:
        """Unlike the cart, the wishlist is dropped on logout"""
        super().on_logout()
        self._set_items([])
