"""End-to-end runs against the in-process mock backend"""

import pytest

from mock_backend import BackendSettings
from storefront.services.sync import SyncState

SHIRT = {"_id": "prod-linen-shirt", "title": "Linen Relaxed Shirt", "price": 29.99}
COAT = {"_id": "prod-wool-coat", "title": "Wool Blend Overcoat", "price": 189.0}
SCARF = {"_id": "prod-silk-scarf", "title": "Silk Print Scarf", "price": 10.0}

ADDRESS = {"line1": "12 MG Road", "city": "Bengaluru", "state": "KA", "zip": "560001", "country": "IN"}


async def login(session):
    result = await session.login("shopper@example.com", "password123")
    assert result.success, result.message


async def test_guest_cart_is_local(session, backend_app):
    await session.cart.add_item(SHIRT, 2, size="M")

    assert session.sync_state is SyncState.UNAUTHENTICATED
    assert session.cart.item_count == 2
    assert backend_app.state.db.carts.carts == {}


async def test_login_makes_server_authoritative(session):
    await session.cart.add_item(SCARF, 3)
    await session.wishlist.add_item(SCARF)

    await login(session)

    assert session.sync_state is SyncState.AUTHENTICATED_SYNCED
    assert session.wishlist.state is SyncState.AUTHENTICATED_SYNCED
    assert session.cart.items == []
    assert session.wishlist.items == []


async def test_server_merges_variants(session, backend_app):
    await login(session)

    await session.cart.add_item(SHIRT, 1, size="M")
    await session.cart.add_item(SHIRT, 2, size="M")
    await session.cart.add_item(SHIRT, 1, size="L")

    assert [(line.size, line.quantity) for line in session.cart.items] == [("M", 3), ("L", 1)]
    assert all(line.cart_entry_id for line in session.cart.items)
    assert session.cart.items[0].name == "Linen Relaxed Shirt"
    assert len(backend_app.state.db.carts.get_items("user-shopper")) == 2


async def test_update_and_remove_round_trip(session):
    await login(session)
    await session.cart.add_item(SHIRT, 1, size="M")
    await session.cart.add_item(SCARF, 1)

    await session.cart.update_quantity("prod-linen-shirt", 4, size="M")
    assert session.cart.item_count == 5

    await session.cart.remove_item("prod-silk-scarf")
    assert [line.product_id for line in session.cart.items] == ["prod-linen-shirt"]


async def test_out_of_stock_add_fails(session):
    await login(session)

    result = await session.cart.add_item(COAT, 6)

    assert not result.success
    assert result.message == "Insufficient stock. Available: 5"
    assert session.cart.items == []


async def test_coupons(session):
    await login(session)
    await session.cart.add_item(SHIRT, 2)

    big = await session.cart.apply_coupon("BIG50")
    assert big.message == "Minimum purchase of ₹200.00 required for this coupon"

    expired = await session.cart.apply_coupon("SUMMER20")
    assert expired.message == "Invalid or expired coupon code"

    used_up = await session.cart.apply_coupon("ONEUSE5")
    assert used_up.message == "Coupon usage limit reached"

    welcome = await session.cart.apply_coupon("welcome10")
    assert welcome.success
    assert session.cart.discount == pytest.approx(5.998)


async def test_checkout_places_order(session, backend_app):
    await login(session)
    await session.cart.add_item(SHIRT, 2, size="M")
    await session.cart.apply_coupon("WELCOME10")

    result = await session.checkout.place_order(ADDRESS, "paypal")

    assert result.success, result.message
    db = backend_app.state.db
    order = db.orders.get_order(result.data["_id"])
    assert order.coupon_code == "WELCOME10"
    assert order.total == pytest.approx(59.98 - 5.998 + 10.0 + 59.98 * 0.07)
    assert db.products.get_product("prod-linen-shirt").stock == 48
    assert db.carts.get_items("user-shopper") == []
    assert session.cart.items == []
    assert session.cart.coupon is None


@pytest.mark.parametrize("backend_settings", [BackendSettings(jwt_secret="test-secret", bulk_cart_clear_enabled=False)])
async def test_clear_without_bulk_endpoint(session, backend_app):
    await login(session)
    await session.cart.add_item(SHIRT, 1, size="M")
    await session.cart.add_item(SCARF, 1)

    result = await session.cart.clear()

    assert result.success
    assert session.cart.items == []
    assert backend_app.state.db.carts.get_items("user-shopper") == []


async def test_expired_access_token_is_refreshed(session, backend_app):
    await login(session)
    refresh_token = session.client.tokens.refresh_token
    session.client.tokens = session.client.tokens.model_copy(update={"access_token": "expired"})

    result = await session.cart.add_item(SHIRT, 1)

    assert result.success
    assert session.client.tokens.access_token != "expired"
    assert session.storage.get_json("tokens")["accessToken"] == session.client.tokens.access_token
    assert session.storage.get_json("tokens")["refreshToken"] == refresh_token


async def test_revoked_refresh_token_signs_out(session, backend_app):
    await login(session)
    backend_app.state.db.users.set_refresh_token("user-shopper", None)
    session.client.tokens = session.client.tokens.model_copy(update={"access_token": "expired"})

    result = await session.cart.add_item(SHIRT, 1)

    assert not result.success
    assert not session.auth.is_authenticated
    assert session.sync_state is SyncState.UNAUTHENTICATED


async def test_logout_keeps_cart_and_drops_wishlist(session):
    await login(session)
    await session.cart.add_item(SHIRT, 1)
    await session.wishlist.add_item(SCARF)

    result = await session.logout()

    assert result.success
    assert session.sync_state is SyncState.UNAUTHENTICATED
    assert session.cart.item_count == 1
    assert session.wishlist.items == []
    assert not session.auth.is_authenticated


async def test_banned_login(session):
    result = await session.login("banned@example.com", "password123")

    assert not result.success
    assert result.message == "Repeated chargebacks"
    assert session.sync_state is SyncState.UNAUTHENTICATED


async def test_session_resumes_after_restart(open_session):
    first = await open_session()
    await login(first)
    await first.cart.add_item(SHIRT, 2, size="M")
    await first.wishlist.add_item(COAT)
    await first.close()

    second = await open_session()
    try:
        assert second.auth.is_authenticated
        assert second.sync_state is SyncState.AUTHENTICATED_SYNCED
        assert second.cart.item_count == 2
        assert second.wishlist.contains("prod-wool-coat")
    finally:
        await second.close()


async def test_sale_price_drives_subtotal(session):
    await login(session)

    await session.cart.add_item({"_id": "prod-denim-jacket", "title": "Cropped Denim Jacket", "price": 89.5}, 2)

    assert session.cart.items[0].unit_price == 69.0
    assert session.cart.subtotal == pytest.approx(138.0)
