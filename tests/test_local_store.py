from storefront.models.cart import LineItem
from storefront.services.cart_store import CartStore
from storefront.services.wishlist_store import WishlistStore
from storefront.storage.local_store import LocalStore


def test_values_survive_reload(tmp_path):
    path = tmp_path / "nested" / "storage.json"
    store = LocalStore(path)
    store.set_json("cart", [{"productId": "p1", "quantity": 2}])

    reopened = LocalStore(path)
    reopened.load()

    assert reopened.get_json("cart") == [{"productId": "p1", "quantity": 2}]


def test_corrupted_value_is_discarded(file_storage):
    file_storage.set_item("cart", "{not json")

    assert file_storage.get_json("cart") is None
    assert "cart" not in file_storage


def test_unreadable_file_starts_empty(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("garbage", encoding="utf-8")

    store = LocalStore(path)
    store.load()

    assert store.get_item("cart") is None


def test_non_object_file_starts_empty(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")

    store = LocalStore(path)
    store.load()

    assert "cart" not in store


def test_memory_store_has_no_file(storage):
    storage.set_json("wishlist", [])
    storage.flush()

    assert storage.path is None
    assert storage.get_json("wishlist") == []


def test_remove_and_clear(file_storage):
    file_storage.set_json("a", 1)
    file_storage.set_json("b", 2)

    file_storage.remove("a")
    assert "a" not in file_storage

    file_storage.clear()
    assert "b" not in file_storage


async def test_cart_snapshot_round_trip(tmp_path, client):
    path = tmp_path / "storage.json"
    cart = CartStore(client, LocalStore(path))
    cart.items = [LineItem(product_id="p1", name="Shirt", unit_price=20, quantity=2, size="M")]
    cart.persist()

    reopened = LocalStore(path)
    reopened.load()
    restored = CartStore(client, reopened)
    restored.hydrate()

    assert restored.items == cart.items


async def test_invalid_cart_snapshot_is_discarded(client, storage):
    storage.set_json("cart", [{"quantity": 2}])
    cart = CartStore(client, storage)

    cart.hydrate()

    assert cart.items == []
    assert "cart" not in storage


async def test_corrupted_wishlist_snapshot_hydrates_empty(client, storage):
    storage.set_item("wishlist", "[{")
    wishlist = WishlistStore(client, storage)

    wishlist.hydrate()

    assert wishlist.items == []
