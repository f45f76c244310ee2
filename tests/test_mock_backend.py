import httpx
import pytest


@pytest.fixture
async def http(backend_app):
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=backend_app), base_url="http://testserver") as client:
        yield client


async def auth_headers(http):
    response = await http.post("/api/auth/login", json={"email": "shopper@example.com", "password": "password123"})
    return {"Authorization": f"Bearer {response.json()['accessToken']}"}


async def test_health(http):
    response = await http.get("/health")

    assert response.json() == {"status": "healthy", "service": "mock-backend"}


async def test_login_rejects_bad_credentials(http):
    response = await http.post("/api/auth/login", json={"email": "shopper@example.com", "password": "nope"})

    assert response.status_code == 400
    assert response.json() == {"message": "Invalid credentials"}


async def test_cart_requires_bearer_token(http):
    response = await http.get("/api/cart")

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Authentication required"}


async def test_cart_entries_are_populated(http):
    headers = await auth_headers(http)

    response = await http.post(
        "/api/cart",
        json={"productId": "prod-silk-scarf", "quantity": 2, "color": "red"},
        headers=headers,
    )

    [entry] = response.json()["data"]["items"]
    assert entry["quantity"] == 2
    assert entry["color"] == "red"
    assert entry["productId"]["title"] == "Silk Print Scarf"
    assert entry["productId"]["images"] == ["/images/silk-scarf.jpg"]


async def test_unknown_product(http):
    headers = await auth_headers(http)

    response = await http.post("/api/cart", json={"productId": "prod-missing"}, headers=headers)

    assert response.status_code == 404
    assert response.json()["error"] == "Product not found"


async def test_invalid_body_is_a_400(http):
    headers = await auth_headers(http)

    response = await http.patch("/api/cart/whatever", json={"quantity": 0}, headers=headers)

    assert response.status_code == 400
    assert response.json()["success"] is False


async def test_order_requires_shipping_fields(http):
    headers = await auth_headers(http)

    response = await http.post(
        "/api/orders",
        json={"shippingAddress": {"line1": "12 MG Road", "city": "Bengaluru"}, "items": []},
        headers=headers,
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Missing required shipping fields: state, zip, country"


async def test_order_requires_items(http):
    headers = await auth_headers(http)
    address = {"line1": "1 Main", "city": "Pune", "state": "MH", "zip": "411001", "country": "IN"}

    response = await http.post("/api/orders", json={"shippingAddress": address, "items": []}, headers=headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Cart is empty"


async def test_verify_coupon_requires_code(http):
    response = await http.post("/api/promotions/verify-coupon", json={})

    assert response.status_code == 400
    assert response.json()["error"] == "Coupon code is required"


async def test_wishlist_add_is_idempotent(http):
    headers = await auth_headers(http)

    await http.post("/api/wishlist", json={"productId": "prod-wool-coat"}, headers=headers)
    response = await http.post("/api/wishlist", json={"productId": "prod-wool-coat"}, headers=headers)

    assert len(response.json()["data"]) == 1


async def test_logout_revokes_refresh_token(http):
    login = await http.post("/api/auth/login", json={"email": "shopper@example.com", "password": "password123"})
    refresh_token = login.json()["refreshToken"]

    await http.post("/api/auth/logout", json={"refreshToken": refresh_token})
    response = await http.post("/api/auth/refresh-token", json={"refreshToken": refresh_token})

    assert response.status_code == 401
