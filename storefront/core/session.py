"""Application state for one storefront session"""

import asyncio
import logging
from typing import Optional

from ..models.auth import AuthTokens
from ..services.api_client import StorefrontClient
from ..services.auth import AuthManager
from ..services.cart_store import CartStore
from ..services.checkout import CheckoutService
from ..services.coupons import CouponValidator
from ..services.pricing import PricingConfig
from ..services.sync import OperationResult, RetryPolicy, SyncState
from ..services.wishlist_store import WishlistStore
from ..storage.local_store import LocalStore
from .config import Settings, get_settings

logger = logging.getLogger(__name__)


class StorefrontSession:
    """
    Owns the local store, API client and state containers.

    Usage:
        async with StorefrontSession(settings) as session:
            await session.cart.add_item(product, quantity=2, size="M")
            await session.login(email, password)
            result = await session.checkout.place_order(address)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        storage: Optional[LocalStore] = None,
        client: Optional[StorefrontClient] = None,
    ):
        self.settings = settings or get_settings()
        self.storage = storage if storage is not None else LocalStore(self.settings.storage_path)
        self.client = client or StorefrontClient(
            self.settings.api_base_url,
            timeout=self.settings.request_timeout,
        )
        self.client.on_tokens_refreshed = self._on_tokens_refreshed
        self.client.on_auth_expired = self._on_auth_expired

        self.auth = AuthManager(self.client, self.storage)
        self.cart = CartStore(
            self.client,
            self.storage,
            coupon_validator=CouponValidator(self.client, self.settings.currency_symbol),
        )
        self.wishlist = WishlistStore(
            self.client,
            self.storage,
            retry_policy=RetryPolicy(
                max_retries=self.settings.wishlist_max_retries,
                initial_delay=self.settings.wishlist_retry_initial_delay,
            ),
        )
        self.checkout = CheckoutService(
            self.client,
            self.cart,
            PricingConfig.from_settings(self.settings),
        )

    @property
    def sync_state(self) -> SyncState:
        return self.cart.state

    async def open(self) -> None:
        """Hydrate from the local snapshot and sync if a login was persisted"""
        self.storage.load()
        self.auth.hydrate()
        self.cart.hydrate()
        self.wishlist.hydrate()
        logger.info(
            f"Session opened: {len(self.cart.items)} cart lines, "
            f"{len(self.wishlist.items)} wishlist items"
        )

        if self.auth.is_authenticated:
            await self._sync_remote()

    async def close(self) -> None:
        """Flush snapshots and release the HTTP client"""
        self.cart.persist()
        self.wishlist.persist()
        self.storage.flush()
        await self.client.close()
        logger.info("Session closed")

    async def __aenter__(self) -> "StorefrontSession":
        await self.open()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def login(self, email: str, password: str) -> OperationResult:
        """Sign in, then make the server cart and wishlist authoritative"""
        result = await self.auth.login(email, password)
        if result.success:
            await self._sync_remote()
        return result

    async def logout(self) -> OperationResult:
        result = await self.auth.logout()
        self._to_unauthenticated()
        return result

    async def _sync_remote(self) -> None:
        # The server copy replaces whatever was collected while logged out
        await asyncio.gather(self.cart.on_authenticated(), self.wishlist.on_authenticated())

    def _to_unauthenticated(self) -> None:
        self.cart.on_logout()
        self.wishlist.on_logout()

    def _on_tokens_refreshed(self, tokens: AuthTokens) -> None:
        self.auth.save_tokens(tokens)

    def _on_auth_expired(self) -> None:
        logger.warning("Session expired; signing out")
        self.auth.clear()
        self._to_unauthenticated()
