"""Tests for CartStore persistence and the storage backends."""

import json
import logging

import pytest

from app.core.local_storage import FileStorage, MemoryStorage
from app.services.cart_store import CART_STORAGE_KEY, CartStore
from conftest import make_snapshot


def test_every_action_overwrites_stored_items():
    storage = MemoryStorage()
    store = CartStore(storage)
    shirt = make_snapshot(price=100.0)

    store.add_item(shirt, 2, "M", "white")
    stored = json.loads(storage.get_item(CART_STORAGE_KEY))
    assert len(stored) == 1
    assert stored[0]["quantity"] == 2
    assert stored[0]["size"] == "M"
    assert stored[0]["product"]["price"] == 100.0

    store.clear_cart()
    assert json.loads(storage.get_item(CART_STORAGE_KEY)) == []


def test_new_store_reloads_persisted_cart():
    storage = MemoryStorage()
    shirt = make_snapshot(price=40.0)
    first = CartStore(storage)
    first.add_item(shirt, 3, "L")

    second = CartStore(storage)

    assert second.state.item_count == 3
    assert second.state.total == pytest.approx(120.0)
    assert second.state.items[0].product.id == shirt.id


def test_empty_storage_starts_empty_and_writes_nothing():
    storage = MemoryStorage()
    store = CartStore(storage)

    assert store.state.items == []
    assert store.state.total == 0
    assert storage.get_item(CART_STORAGE_KEY) is None


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        '{"items": []}',
        '[{"product": {"id": "x"}, "quantity": 1}]',
    ],
)
def test_unreadable_cart_falls_back_to_empty(raw, caplog):
    storage = MemoryStorage({CART_STORAGE_KEY: raw})

    with caplog.at_level(logging.ERROR, logger="app.services.cart_store"):
        store = CartStore(storage)

    assert store.state.items == []
    assert store.state.item_count == 0
    assert "Error loading cart from storage" in caplog.text
    # The bad value is only replaced by the next action
    assert storage.get_item(CART_STORAGE_KEY) == raw


def test_stored_line_with_zero_quantity_is_rejected():
    shirt = make_snapshot()
    line = {"product": shirt.model_dump(mode="json"), "quantity": 0}
    storage = MemoryStorage({CART_STORAGE_KEY: json.dumps([line])})

    assert CartStore(storage).state.items == []


def test_file_storage_round_trip(tmp_path):
    root = tmp_path / "carts" / "abc123"
    storage = FileStorage(root)

    assert storage.get_item("cart") is None
    assert not root.exists()

    storage.set_item("cart", "[]")
    assert (root / "cart.json").read_text(encoding="utf-8") == "[]"
    assert storage.get_item("cart") == "[]"

    storage.remove_item("cart")
    assert storage.get_item("cart") is None
    storage.remove_item("cart")


def test_cart_survives_restart_on_disk(tmp_path):
    shirt = make_snapshot(price=75.5)
    CartStore(FileStorage(tmp_path)).add_item(shirt, 2, None, "white")

    reloaded = CartStore(FileStorage(tmp_path))

    assert reloaded.state.items[0].color == "white"
    assert reloaded.state.total == pytest.approx(151.0)


def test_undecodable_cart_file_falls_back_to_empty(tmp_path, caplog):
    (tmp_path / "cart.json").write_bytes(b"\xff\xfe[garbage")

    with caplog.at_level(logging.ERROR, logger="app.services.cart_store"):
        store = CartStore(FileStorage(tmp_path))

    assert store.state.items == []
    assert "Error loading cart from storage" in caplog.text

    store.add_item(make_snapshot(), 1)
    assert CartStore(FileStorage(tmp_path)).state.item_count == 1


@pytest.mark.parametrize("quantity", [0, -5])
def test_non_positive_add_leaves_stored_cart_intact(quantity):
    storage = MemoryStorage()
    store = CartStore(storage)
    shirt = make_snapshot(price=100.0)
    store.add_item(shirt, 2, "M")

    with pytest.raises(ValueError):
        store.add_item(shirt, quantity, "M")

    assert store.state.item_count == 2
    assert store.state.total == pytest.approx(200.0)
    assert CartStore(storage).state.items[0].quantity == 2
