"""Tests for the pure cart reducer."""

import uuid

import pytest

from app.schemas.cart import CartState
from app.services.cart_store import (
    AddItem,
    ClearCart,
    LoadCart,
    RemoveItem,
    UpdateQuantity,
    cart_reducer,
)
from conftest import make_snapshot


def assert_projections(state: CartState):
    assert state.total == pytest.approx(
        sum(item.product.price * item.quantity for item in state.items)
    )
    assert state.item_count == sum(item.quantity for item in state.items)


def test_adding_same_line_merges_quantities():
    shirt = make_snapshot(price=100.0)
    state = CartState()
    for qty in (1, 2, 4):
        state = cart_reducer(state, AddItem(shirt, qty, "M", "white"))

    assert len(state.items) == 1
    assert state.items[0].quantity == 7
    assert state.item_count == 7
    assert state.total == pytest.approx(700.0)


def test_different_sizes_stay_separate_lines():
    shirt = make_snapshot(price=100.0)
    state = cart_reducer(CartState(), AddItem(shirt, 2, "M"))
    state = cart_reducer(state, AddItem(shirt, 1, "L"))

    assert [(i.size, i.quantity) for i in state.items] == [("M", 2), ("L", 1)]
    assert state.item_count == 3
    assert state.total == pytest.approx(300.0)


def test_no_variant_and_variant_are_distinct():
    shirt = make_snapshot()
    state = cart_reducer(CartState(), AddItem(shirt, 1))
    state = cart_reducer(state, AddItem(shirt, 1, None, "white"))

    assert len(state.items) == 2


def test_reducer_does_not_mutate_previous_state():
    shirt = make_snapshot()
    before = cart_reducer(CartState(), AddItem(shirt, 1, "M"))
    after = cart_reducer(before, AddItem(shirt, 3, "M"))

    assert before.items[0].quantity == 1
    assert after.items[0].quantity == 4


def test_remove_item_only_drops_matching_key():
    shirt = make_snapshot(price=50.0)
    trousers = make_snapshot(price=200.0, name="Chinos", slug="chinos")
    state = cart_reducer(CartState(), AddItem(shirt, 1, "M"))
    state = cart_reducer(state, AddItem(shirt, 2, "L"))
    state = cart_reducer(state, AddItem(trousers, 1))

    state = cart_reducer(state, RemoveItem(shirt.id, "M"))

    assert [(i.product.id, i.size) for i in state.items] == [
        (shirt.id, "L"),
        (trousers.id, None),
    ]
    assert_projections(state)


def test_remove_unknown_item_is_noop():
    shirt = make_snapshot()
    state = cart_reducer(CartState(), AddItem(shirt, 2))
    after = cart_reducer(state, RemoveItem(uuid.uuid4()))

    assert after.items == state.items
    assert after.item_count == 2


def test_update_quantity_sets_absolute_value():
    shirt = make_snapshot(price=80.0)
    state = cart_reducer(CartState(), AddItem(shirt, 2, "M"))
    state = cart_reducer(state, UpdateQuantity(shirt.id, 5, "M"))

    assert state.items[0].quantity == 5
    assert state.total == pytest.approx(400.0)
    assert state.item_count == 5


@pytest.mark.parametrize("quantity", [0, -3])
def test_update_quantity_non_positive_removes_line(quantity):
    shirt = make_snapshot()
    state = cart_reducer(CartState(), AddItem(shirt, 2, "M"))

    state = cart_reducer(state, UpdateQuantity(shirt.id, quantity, "M"))
    assert state.items == []
    assert state.total == 0
    assert state.item_count == 0

    again = cart_reducer(state, UpdateQuantity(shirt.id, quantity, "M"))
    assert again.items == []
    assert again.item_count == 0


def test_update_quantity_ignores_other_variants():
    shirt = make_snapshot()
    state = cart_reducer(CartState(), AddItem(shirt, 1, "M"))
    state = cart_reducer(state, UpdateQuantity(shirt.id, 9, "L"))

    assert state.items[0].quantity == 1


def test_clear_cart_resets_everything():
    state = cart_reducer(CartState(), AddItem(make_snapshot(), 3, "M"))
    state = cart_reducer(state, ClearCart())

    assert state.items == []
    assert state.total == 0
    assert state.item_count == 0


def test_load_cart_recomputes_projections():
    seeded = cart_reducer(CartState(), AddItem(make_snapshot(price=12.5), 4))
    loaded = cart_reducer(CartState(), LoadCart(seeded.items))

    assert loaded.total == pytest.approx(50.0)
    assert loaded.item_count == 4


def test_projections_hold_after_mixed_sequence():
    a = make_snapshot(price=19.99)
    b = make_snapshot(price=5.25, name="Socks", slug="socks")
    actions = [
        AddItem(a, 2, "M"),
        AddItem(b, 3),
        AddItem(a, 1, "M"),
        UpdateQuantity(b.id, 1),
        AddItem(a, 4, "L"),
        RemoveItem(a.id, "M"),
        UpdateQuantity(a.id, 2, "L"),
    ]
    state = CartState()
    for action in actions:
        state = cart_reducer(state, action)
        assert_projections(state)

    assert state.item_count == 3


@pytest.mark.parametrize("quantity", [0, -5])
def test_add_item_rejects_non_positive_quantity(quantity):
    shirt = make_snapshot()
    state = cart_reducer(CartState(), AddItem(shirt, 2, "M"))

    # same outcome whether or not a matching line exists
    with pytest.raises(ValueError):
        cart_reducer(state, AddItem(shirt, quantity, "M"))
    with pytest.raises(ValueError):
        cart_reducer(CartState(), AddItem(shirt, quantity, "L"))

    assert state.items[0].quantity == 2
