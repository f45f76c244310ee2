"""Cart state container"""

import asyncio
import logging
from typing import Any, Optional, Union

from ..errors import (
    InvalidCouponError,
    MinimumPurchaseError,
    NotFoundError,
    StorefrontError,
)
from ..models.cart import LineItem, parse_quantity
from ..models.coupon import Coupon
from ..models.product import ProductSnapshot
from ..storage.local_store import LocalStore
from .api_client import StorefrontClient
from .coupons import CouponValidator
from .line_items import (
    add_line,
    coerce_quantity,
    find_line,
    item_count,
    matching_lines,
    remove_line,
    set_quantity,
)
from .pricing import CartTotals, CheckoutSummary, PricingConfig, calculate_cart_totals, calculate_checkout
from .sync import NetworkErrorPolicy, OperationResult, RetryPolicy, SyncedCollection

logger = logging.getLogger(__name__)


class CartStore(SyncedCollection[LineItem]):
    """
    Cart lines plus the single active coupon.

    Unauthenticated carts are merged locally. Authenticated carts forward
    each mutation and take the server's cart as the new state; failures
    leave the cart unchanged.
    """

    storage_key = "cart"
    item_model = LineItem

    def __init__(
        self,
        client: StorefrontClient,
        storage: LocalStore,
        coupon_validator: Optional[CouponValidator] = None,
        network_error_policy: NetworkErrorPolicy = NetworkErrorPolicy.FAIL,
        retry_policy: Optional[RetryPolicy] = None,
    ):
        super().__init__(client, storage, network_error_policy, retry_policy)
        self.coupon_validator = coupon_validator or CouponValidator(client)
        self.coupon: Optional[Coupon] = None
        self.coupon_error: Optional[str] = None

    @property
    def lines(self) -> list[LineItem]:
        return self.items

    # ==================== Remote sync ====================

    async def _fetch_remote(self) -> dict:
        return await self.client.get_cart()

    def _parse_remote(self, payload: dict) -> list[LineItem]:
        data = payload.get("data") or {}
        entries = self._resolvable(data.get("items") or [])
        return [LineItem.from_remote(entry) for entry in entries]

    # ==================== Mutations ====================

    async def add_item(
        self,
        product: Union[ProductSnapshot, dict],
        quantity: Any = 1,
        size: Optional[str] = None,
        color: Optional[str] = None,
    ) -> OperationResult:
        """Add a product; repeated adds of the same variant merge quantities"""
        if not isinstance(product, ProductSnapshot):
            product = ProductSnapshot.model_validate(product)
        quantity = coerce_quantity(quantity)

        def apply_locally() -> list[LineItem]:
            return add_line(self.items, product, quantity, size, color)

        if not self.is_remote:
            self._set_items(apply_locally())
            return OperationResult(success=True, data=self.items)

        return await self._run_remote(
            lambda: self.client.add_cart_item(product.id, quantity, size, color),
            optimistic=apply_locally,
        )

    async def remove_item(
        self,
        product_id: str,
        size: Optional[str] = None,
        color: Optional[str] = None,
    ) -> OperationResult:
        """
        Remove lines for a product; omitted size/color match any variant.

        Remote variants are deleted one request at a time, stopping at the
        first failure. Variants deleted before that stay deleted and the
        cart reflects the server's last successful response, so a failed
        result can still mean a partial removal.
        """
        if not self.is_remote:
            self._set_items(remove_line(self.items, product_id, size, color))
            return OperationResult(success=True, data=self.items)

        targets = [line for line in matching_lines(self.items, product_id, size, color) if line.cart_entry_id]
        if not targets:
            return self._fail(NotFoundError("Item not found in cart"))

        result = OperationResult(success=True, data=self.items)
        for line in targets:
            result = await self._run_remote(
                lambda entry_id=line.cart_entry_id: self.client.remove_cart_item(entry_id)
            )
            if not result.success:
                break
        return result

    async def update_quantity(
        self,
        product_id: str,
        quantity: Any,
        size: Optional[str] = None,
        color: Optional[str] = None,
    ) -> OperationResult:
        """Set a line's quantity; zero, negative or non-numeric removes it"""
        parsed = parse_quantity(quantity)
        if parsed is None or parsed <= 0:
            return await self.remove_item(product_id, size, color)

        if not self.is_remote:
            self._set_items(set_quantity(self.items, (product_id, size, color), parsed))
            return OperationResult(success=True, data=self.items)

        index = find_line(self.items, (product_id, size, color))
        target = self.items[index] if index is not None else None
        if target is None or not target.cart_entry_id:
            return self._fail(NotFoundError("Item not found in cart"))

        return await self._run_remote(
            lambda: self.client.update_cart_item(target.cart_entry_id, parsed)
        )

    async def clear(self) -> OperationResult:
        """
        Empty the cart.

        Remote carts try the bulk endpoint first and fall back to deleting
        each entry; individual failures are ignored and the local cart
        always ends up empty.
        """
        if not self.is_remote:
            self._set_items([])
            return OperationResult(success=True, data=self.items)

        self.loading = True
        self.error = None
        try:
            await self.client.clear_cart()
        except StorefrontError as e:
            logger.warning(f"Bulk cart clear failed ({e.message}); deleting entries individually")
            entry_ids = [line.cart_entry_id for line in self.items if line.cart_entry_id]
            results = await asyncio.gather(
                *(self.client.remove_cart_item(entry_id) for entry_id in entry_ids),
                return_exceptions=True,
            )
            failures = [r for r in results if isinstance(r, BaseException)]
            if failures:
                logger.warning(f"{len(failures)} of {len(entry_ids)} cart entries could not be deleted")
        finally:
            self.loading = False

        self._set_items([])
        return OperationResult(success=True, data=self.items)

    # ==================== Coupons ====================

    async def apply_coupon(self, code: str) -> OperationResult:
        """Validate and activate a coupon against the current subtotal"""
        self.coupon_error = None
        try:
            applied = await self.coupon_validator.validate(code, self.subtotal)
        except (InvalidCouponError, MinimumPurchaseError) as e:
            self.coupon = None
            self.coupon_error = e.message
            return OperationResult(success=False, error=e)
        except StorefrontError as e:
            self.coupon_error = e.message
            return OperationResult(success=False, error=e)

        self.coupon = applied.coupon
        return OperationResult(success=True, data=applied.to_dict())

    def remove_coupon(self) -> OperationResult:
        self.coupon = None
        self.coupon_error = None
        return OperationResult(success=True)

    # ==================== Pricing ====================

    @property
    def totals(self) -> CartTotals:
        return calculate_cart_totals(self.items, self.coupon)

    @property
    def subtotal(self) -> float:
        return self.totals.subtotal

    @property
    def discount(self) -> float:
        return self.totals.discount

    @property
    def item_count(self) -> int:
        return item_count(self.items)

    def checkout_summary(self, config: Optional[PricingConfig] = None) -> CheckoutSummary:
        return calculate_checkout(self.items, self.coupon, config)
