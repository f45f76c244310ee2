"""Order placement"""

import logging
from typing import Optional, Union

import pydantic

from ..errors import StorefrontError, ValidationError
from ..models.checkout import OrderItem, OrderRequest, PaymentMethod, ShippingAddress
from .api_client import StorefrontClient
from .cart_store import CartStore
from .pricing import CheckoutSummary, PricingConfig
from .sync import OperationResult

logger = logging.getLogger(__name__)


class CheckoutService:
    """Builds the order payload from the cart and submits it"""

    def __init__(
        self,
        client: StorefrontClient,
        cart: CartStore,
        pricing: Optional[PricingConfig] = None,
    ):
        self.client = client
        self.cart = cart
        self.pricing = pricing or PricingConfig()
        self.error: Optional[str] = None
        self.loading = False

    def summary(self) -> CheckoutSummary:
        return self.cart.checkout_summary(self.pricing)

    def build_order(
        self,
        shipping_address: Union[ShippingAddress, dict],
        payment_method: Union[PaymentMethod, str],
    ) -> OrderRequest:
        """
        Assemble the `POST /orders` body.

        Raises:
            ValidationError: empty cart, missing address fields or unknown
                payment method
        """
        if not self.cart.items:
            raise ValidationError("Your cart is empty")

        try:
            address = ShippingAddress.model_validate(shipping_address)
        except pydantic.ValidationError as e:
            missing = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
            raise ValidationError(f"Missing required shipping fields: {', '.join(missing)}") from e

        try:
            method = PaymentMethod(payment_method)
        except ValueError as e:
            raise ValidationError(f"Unsupported payment method: {payment_method}") from e

        summary = self.summary()
        return OrderRequest(
            shipping_address=address,
            payment_method=method,
            items=[
                OrderItem(
                    product_id=line.product_id,
                    quantity=line.quantity,
                    price=line.unit_price,
                    size=line.size,
                    color=line.color,
                )
                for line in self.cart.items
            ],
            subtotal=summary.subtotal,
            shipping_cost=summary.shipping,
            tax=summary.tax,
            total=summary.grand_total,
            coupon_code=self.cart.coupon.code if self.cart.coupon else None,
        )

    async def place_order(
        self,
        shipping_address: Union[ShippingAddress, dict],
        payment_method: Union[PaymentMethod, str] = PaymentMethod.CREDIT_CARD,
    ) -> OperationResult:
        """Submit the order; on success the cart and coupon are cleared"""
        self.error = None
        self.loading = True
        try:
            order = self.build_order(shipping_address, payment_method)
            response = await self.client.create_order(order.to_payload())
        except StorefrontError as e:
            self.error = e.message
            logger.error(f"Checkout failed: {e.message}")
            return OperationResult(success=False, error=e)
        finally:
            self.loading = False

        placed = response.get("data") or {}
        logger.info(f"Order {placed.get('_id')} placed: total {order.total}")

        await self.cart.clear()
        self.cart.remove_coupon()
        return OperationResult(success=True, data=placed)
