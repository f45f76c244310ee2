import json

import pytest

from storefront.errors import ValidationError
from storefront.models.cart import LineItem
from storefront.models.coupon import Coupon, DiscountType
from storefront.models.checkout import PaymentMethod
from storefront.services.checkout import CheckoutService
from storefront.services.pricing import PricingConfig

from conftest import cart_body, cart_entry

ADDRESS = {
    "name": "Demo Shopper",
    "line1": "12 MG Road",
    "city": "Bengaluru",
    "state": "KA",
    "zip": "560001",
    "country": "IN",
}


@pytest.fixture
def checkout(client, remote_cart):
    remote_cart.items = [
        LineItem.from_remote(cart_entry("e1", "p1", quantity=2, price=25.0, size="M")),
        LineItem.from_remote(cart_entry("e2", "p2", quantity=1, price=10.0)),
    ]
    return CheckoutService(client, remote_cart, PricingConfig())


async def test_summary(checkout):
    summary = checkout.summary()

    assert summary.subtotal == 60.0
    assert summary.shipping == 10.0
    assert summary.tax == pytest.approx(4.2)
    assert summary.grand_total == pytest.approx(74.2)


async def test_empty_cart_rejected(client, cart):
    with pytest.raises(ValidationError, match="Your cart is empty"):
        CheckoutService(client, cart).build_order(ADDRESS, "credit-card")


async def test_missing_shipping_fields_listed(checkout):
    with pytest.raises(ValidationError) as exc_info:
        checkout.build_order({"line1": "12 MG Road", "city": "  "}, "credit-card")

    assert exc_info.value.message == "Missing required shipping fields: city, country, state, zip"


async def test_unknown_payment_method_rejected(checkout):
    with pytest.raises(ValidationError, match="Unsupported payment method"):
        checkout.build_order(ADDRESS, "cash")


async def test_order_payload(checkout):
    checkout.cart.coupon = Coupon(code="WELCOME10", discount_type=DiscountType.PERCENTAGE, discount_value=10)

    payload = checkout.build_order(ADDRESS, PaymentMethod.PAYPAL).to_payload()

    assert payload["paymentMethod"] == "paypal"
    assert payload["shippingAddress"]["line1"] == "12 MG Road"
    assert payload["items"][0] == {"productId": "p1", "quantity": 2, "price": 25.0, "size": "M", "color": None}
    assert payload["subtotal"] == 60.0
    assert payload["shippingCost"] == 10.0
    assert payload["total"] == pytest.approx(60.0 - 6.0 + 10.0 + 4.2)
    assert payload["couponCode"] == "WELCOME10"


async def test_place_order_clears_cart_and_coupon(api, checkout):
    checkout.cart.coupon = Coupon(code="WELCOME10", discount_type=DiscountType.PERCENTAGE, discount_value=10)
    api.on("POST", "/api/orders", (201, {"success": True, "data": {"_id": "order_1", "status": "confirmed"}}))
    api.on("DELETE", "/api/cart", (200, cart_body()))

    result = await checkout.place_order(ADDRESS)

    assert result.success
    assert result.data["_id"] == "order_1"
    assert checkout.cart.items == []
    assert checkout.cart.coupon is None
    body = json.loads(api.calls("POST", "/api/orders")[0].content)
    assert body["paymentMethod"] == "credit-card"


async def test_place_order_failure_keeps_cart(api, checkout):
    api.on("POST", "/api/orders", (400, {"success": False, "error": "Insufficient stock for Linen Shirt"}))

    result = await checkout.place_order(ADDRESS)

    assert not result.success
    assert checkout.error == "Insufficient stock for Linen Shirt"
    assert len(checkout.cart.items) == 2
    assert not checkout.loading


async def test_place_order_validation_makes_no_request(api, checkout):
    result = await checkout.place_order({"line1": "12 MG Road"})

    assert isinstance(result.error, ValidationError)
    assert api.requests == []
