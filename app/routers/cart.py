# app/routers/cart.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.cart_session import get_cart_store
from app.database import get_session
from app.repositories.product_repo import ProductRepository
from app.schemas.cart import CartState, CartItemCreate, CartItemUpdate
from app.services.cart_service import CartService
from app.services.cart_store import CartStore

router = APIRouter(prefix="/cart", tags=["Cart"])

product_repo = ProductRepository()
service = CartService(product_repo)


@router.get("", response_model=CartState)
def get_my_cart(store: CartStore = Depends(get_cart_store)):
    """
    Get the buyer's cart with total and item_count.

    Auth:
      - None. The cart is tied to the cart cookie, guests included.
    """
    return service.get_cart(store)


@router.post("/items", response_model=CartState)
def add_to_cart(
    payload: CartItemCreate,
    session: Session = Depends(get_session),
    store: CartStore = Depends(get_cart_store),
):
    """
    Add a product to the cart. Lines with the same product, size and
    color are merged.

    Returns the updated cart.
    """
    return service.add_to_cart(session, store, payload)


@router.patch("/items/{product_id}", response_model=CartState)
def update_cart_item(
    product_id: uuid.UUID,
    payload: CartItemUpdate,
    store: CartStore = Depends(get_cart_store),
):
    """
    Set the quantity of a cart line (quantity <= 0 removes it).

    Returns the updated cart.
    """
    return service.update_quantity(store, product_id, payload)


@router.delete("/items/{product_id}", response_model=CartState)
def remove_cart_item(
    product_id: uuid.UUID,
    size: str | None = None,
    color: str | None = None,
    store: CartStore = Depends(get_cart_store),
):
    """
    Remove the cart line for a product and variant.

    Returns the updated cart.
    """
    return service.remove_item(store, product_id, size, color)


@router.delete("", response_model=CartState)
def clear_cart(store: CartStore = Depends(get_cart_store)):
    """
    Clear the entire cart.

    Returns an empty cart.
    """
    return service.clear_cart(store)
