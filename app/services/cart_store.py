# app/services/cart_store.py
"""
Buyer cart: a pure reducer over cart actions plus a store that persists
every new state to a key/value storage.

    store = CartStore(FileStorage(".cart_storage/<cart_id>"))
    store.add_item(product, 2, size="M")
    store.state.total, store.state.item_count

`total` and `item_count` are recomputed from the items after every action.
"""

import logging
import uuid
from dataclasses import dataclass

from pydantic import TypeAdapter, ValidationError

from app.core.local_storage import KeyValueStorage
from app.schemas.cart import CartItem, CartState, ProductSnapshot

logger = logging.getLogger(__name__)

# Fixed storage key holding the JSON list of cart items
CART_STORAGE_KEY = "cart"

_ITEMS_ADAPTER = TypeAdapter(list[CartItem])


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AddItem:
    product: ProductSnapshot
    quantity: int
    size: str | None = None
    color: str | None = None

    def __post_init__(self):
        # A cart line never drops below 1; lowering goes through UpdateQuantity
        if self.quantity <= 0:
            raise ValueError(f"quantity to add must be positive, got {self.quantity}")


@dataclass(frozen=True)
class RemoveItem:
    product_id: uuid.UUID
    size: str | None = None
    color: str | None = None


@dataclass(frozen=True)
class UpdateQuantity:
    product_id: uuid.UUID
    quantity: int
    size: str | None = None
    color: str | None = None


@dataclass(frozen=True)
class ClearCart:
    pass


@dataclass(frozen=True)
class LoadCart:
    items: list[CartItem]


CartAction = AddItem | RemoveItem | UpdateQuantity | ClearCart | LoadCart


# ---------------------------------------------------------------------------
# Reducer
# ---------------------------------------------------------------------------


def _with_totals(items: list[CartItem]) -> CartState:
    total = sum((item.product.price * item.quantity for item in items), 0.0)
    item_count = sum(item.quantity for item in items)
    return CartState(items=items, total=total, item_count=item_count)


def cart_reducer(state: CartState, action: CartAction) -> CartState:
    """
    Return the cart state that results from applying `action` to `state`.

    Never mutates `state` or its items.
    """
    if isinstance(action, AddItem):
        existing = next(
            (
                i
                for i, item in enumerate(state.items)
                if item.matches(action.product.id, action.size, action.color)
            ),
            None,
        )
        if existing is not None:
            items = [
                item.model_copy(update={"quantity": item.quantity + action.quantity})
                if i == existing
                else item
                for i, item in enumerate(state.items)
            ]
        else:
            items = [
                *state.items,
                CartItem(
                    product=action.product,
                    quantity=action.quantity,
                    size=action.size,
                    color=action.color,
                ),
            ]
        return _with_totals(items)

    if isinstance(action, RemoveItem):
        items = [
            item
            for item in state.items
            if not item.matches(action.product_id, action.size, action.color)
        ]
        return _with_totals(items)

    if isinstance(action, UpdateQuantity):
        if action.quantity <= 0:
            return cart_reducer(
                state,
                RemoveItem(action.product_id, action.size, action.color),
            )
        items = [
            item.model_copy(update={"quantity": action.quantity})
            if item.matches(action.product_id, action.size, action.color)
            else item
            for item in state.items
        ]
        return _with_totals(items)

    if isinstance(action, ClearCart):
        return CartState()

    if isinstance(action, LoadCart):
        return _with_totals(list(action.items))

    return state


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class CartStore:
    """
    Single-writer cart bound to one storage.

    On construction the stored item list is loaded; unreadable data is
    logged and replaced by an empty cart. Every dispatched action
    overwrites the stored list.
    """

    def __init__(self, storage: KeyValueStorage, key: str = CART_STORAGE_KEY):
        self._storage = storage
        self._key = key
        self._state = cart_reducer(CartState(), LoadCart(self._load_items()))

    @property
    def state(self) -> CartState:
        return self._state

    def _load_items(self) -> list[CartItem]:
        try:
            raw = self._storage.get_item(self._key)
            if not raw:
                return []
            return _ITEMS_ADAPTER.validate_json(raw)
        except (ValidationError, UnicodeDecodeError, OSError) as exc:
            logger.error("Error loading cart from storage: %s", exc)
            return []

    def _persist(self) -> None:
        self._storage.set_item(
            self._key,
            _ITEMS_ADAPTER.dump_json(self._state.items).decode("utf-8"),
        )

    def dispatch(self, action: CartAction) -> CartState:
        self._state = cart_reducer(self._state, action)
        self._persist()
        return self._state

    # ---- convenience wrappers ----

    def add_item(
        self,
        product: ProductSnapshot,
        quantity: int,
        size: str | None = None,
        color: str | None = None,
    ) -> CartState:
        return self.dispatch(AddItem(product, quantity, size, color))

    def remove_item(
        self,
        product_id: uuid.UUID,
        size: str | None = None,
        color: str | None = None,
    ) -> CartState:
        return self.dispatch(RemoveItem(product_id, size, color))

    def update_quantity(
        self,
        product_id: uuid.UUID,
        quantity: int,
        size: str | None = None,
        color: str | None = None,
    ) -> CartState:
        return self.dispatch(UpdateQuantity(product_id, quantity, size, color))

    def clear_cart(self) -> CartState:
        return self.dispatch(ClearCart())
