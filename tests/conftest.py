import httpx
import pytest

from mock_backend import BackendSettings, create_app
from storefront.core.config import Settings
from storefront.core.session import StorefrontSession
from storefront.models.auth import AuthTokens
from storefront.services.api_client import StorefrontClient
from storefront.services.cart_store import CartStore
from storefront.services.sync import SyncState
from storefront.services.wishlist_store import WishlistStore
from storefront.storage.local_store import LocalStore

BASE_URL = "http://test/api"


class FakeApi:
    """
    httpx.MockTransport handler with canned replies per (method, path).

    A reply is a `(status, json_body)` tuple, an exception to raise, or a
    callable taking the request and returning either. Replies are consumed
    in order and the last one repeats.
    """

    def __init__(self):
        self.routes = {}
        self.requests = []

    def on(self, method, path, *replies):
        self.routes[(method, path)] = list(replies)

    def calls(self, method, path):
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def __call__(self, request):
        self.requests.append(request)
        replies = self.routes.get((request.method, request.url.path))
        if not replies:
            return httpx.Response(404, json={"success": False, "error": "Not found"})

        reply = replies.pop(0) if len(replies) > 1 else replies[0]
        if callable(reply) and not isinstance(reply, Exception):
            reply = reply(request)
        if isinstance(reply, Exception):
            raise reply

        status, body = reply
        return httpx.Response(status, json=body)


def product_doc(product_id="p1", title="Linen Shirt", price=20.0):
    return {"_id": product_id, "title": title, "price": price, "images": [f"/img/{product_id}.jpg"], "stock": 10}


def cart_entry(entry_id, product_id="p1", quantity=1, price=20.0, size=None, color=None):
    return {
        "_id": entry_id,
        "productId": product_doc(product_id, price=price),
        "quantity": quantity,
        "size": size,
        "color": color,
    }


def cart_body(*entries):
    return {"success": True, "data": {"items": list(entries)}}


def wishlist_entry(item_id, product_id="p1"):
    return {"_id": item_id, "productId": product_doc(product_id), "addedAt": "2024-05-01T10:00:00Z"}


def wishlist_body(*entries):
    return {"success": True, "data": list(entries)}


@pytest.fixture
def api():
    return FakeApi()


@pytest.fixture
async def client(api):
    client = StorefrontClient(BASE_URL, transport=httpx.MockTransport(api))
    yield client
    await client.close()


@pytest.fixture
def storage():
    """Memory-only store"""
    return LocalStore()


@pytest.fixture
def file_storage(tmp_path):
    return LocalStore(tmp_path / "storage.json")


def go_remote(store):
    store.client.set_tokens(AuthTokens(access_token="access", refresh_token="refresh"))
    store.state = SyncState.AUTHENTICATED_SYNCED
    return store


@pytest.fixture
def cart(client, storage):
    return CartStore(client, storage)


@pytest.fixture
def remote_cart(cart):
    return go_remote(cart)


@pytest.fixture
def remote_wishlist(client, storage):
    return go_remote(WishlistStore(client, storage))


# ==================== Mock backend ====================

@pytest.fixture
def backend_settings():
    return BackendSettings(jwt_secret="test-secret")


@pytest.fixture
def backend_app(backend_settings):
    return create_app(backend_settings)


@pytest.fixture
def client_settings(tmp_path):
    return Settings(
        api_base_url="http://testserver/api",
        storage_path=str(tmp_path / "storage.json"),
        wishlist_retry_initial_delay=0,
    )


@pytest.fixture
def open_session(backend_app, client_settings):
    """Factory for sessions talking to the in-process mock backend"""

    async def _open():
        client = StorefrontClient(
            client_settings.api_base_url,
            transport=httpx.ASGITransport(app=backend_app),
        )
        session = StorefrontSession(client_settings, client=client)
        await session.open()
        return session

    return _open


@pytest.fixture
async def session(open_session):
    session = await open_session()
    yield session
    await session.close()
