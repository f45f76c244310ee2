import json

import httpx
import pytest

from storefront.errors import (
    AuthenticationError,
    NetworkConnectionError,
    NetworkError,
    NetworkTimeoutError,
    ServerError,
)
from storefront.models.auth import AuthTokens

from conftest import cart_body


async def test_bearer_token_attached(api, client):
    api.on("GET", "/api/cart", (200, cart_body()))
    client.set_tokens(AuthTokens(access_token="abc", refresh_token="r"))

    body = await client.get_cart()

    assert body == cart_body()
    assert api.requests[0].headers["Authorization"] == "Bearer abc"


async def test_login_sends_no_token(api, client):
    api.on("POST", "/api/auth/login", (200, {"accessToken": "a", "refreshToken": "r"}))
    client.set_tokens(AuthTokens(access_token="stale"))

    await client.login("shopper@example.com", "pw")

    request = api.requests[0]
    assert "Authorization" not in request.headers
    assert json.loads(request.content) == {"email": "shopper@example.com", "password": "pw"}


async def test_error_status_uses_error_field(api, client):
    api.on("POST", "/api/cart", (404, {"success": False, "error": "Product not found"}))

    with pytest.raises(ServerError) as exc_info:
        await client.add_cart_item("missing")

    assert exc_info.value.message == "Product not found"
    assert exc_info.value.status_code == 404


async def test_error_status_uses_message_field(api, client):
    api.on("POST", "/api/auth/login", (400, {"message": "Invalid credentials"}))

    with pytest.raises(ServerError, match="Invalid credentials"):
        await client.login("a@b.c", "wrong")


async def test_success_false_body_is_an_error(api, client):
    api.on("GET", "/api/wishlist", (200, {"success": False, "error": "Wishlist unavailable"}))

    with pytest.raises(ServerError, match="Wishlist unavailable"):
        await client.get_wishlist()


async def test_non_object_body_is_an_error(api, client):
    api.on("GET", "/api/cart", (200, ["not", "an", "object"]))

    with pytest.raises(ServerError):
        await client.get_cart()


@pytest.mark.parametrize(
    "raised, expected",
    [
        (httpx.ConnectError("connection refused"), NetworkConnectionError),
        (httpx.ReadTimeout("timed out"), NetworkTimeoutError),
        (httpx.RemoteProtocolError("peer closed"), NetworkError),
    ],
)
async def test_transport_errors_map_to_network_errors(api, client, raised, expected):
    api.on("GET", "/api/cart", raised)

    with pytest.raises(expected):
        await client.get_cart()


async def test_401_refreshes_and_replays(api, client):
    refreshed = []
    client.on_tokens_refreshed = refreshed.append
    client.set_tokens(AuthTokens(access_token="old", refresh_token="refresh-1"))

    def cart(request):
        if request.headers["Authorization"] == "Bearer new":
            return 200, cart_body()
        return 401, {"message": "Token expired"}

    api.on("GET", "/api/cart", cart)
    api.on("POST", "/api/auth/refresh-token", (200, {"accessToken": "new"}))

    body = await client.get_cart()

    assert body["success"] is True
    assert len(api.calls("GET", "/api/cart")) == 2
    refresh_request = api.calls("POST", "/api/auth/refresh-token")[0]
    assert json.loads(refresh_request.content) == {"refreshToken": "refresh-1"}
    assert client.tokens == AuthTokens(access_token="new", refresh_token="refresh-1")
    assert refreshed == [client.tokens]


async def test_rejected_refresh_expires_session(api, client):
    expired = []
    client.on_auth_expired = lambda: expired.append(True)
    client.set_tokens(AuthTokens(access_token="old", refresh_token="revoked"))
    api.on("GET", "/api/cart", (401, {"message": "Token expired"}))
    api.on("POST", "/api/auth/refresh-token", (401, {"message": "Invalid refresh token"}))

    with pytest.raises(AuthenticationError):
        await client.get_cart()

    assert client.tokens is None
    assert expired == [True]
    assert len(api.calls("GET", "/api/cart")) == 1


async def test_401_without_refresh_token_expires_session(api, client):
    client.set_tokens(AuthTokens(access_token="old"))
    api.on("GET", "/api/auth/profile", (401, {"message": "Token expired"}))

    with pytest.raises(AuthenticationError):
        await client.get_profile()

    assert api.calls("POST", "/api/auth/refresh-token") == []
