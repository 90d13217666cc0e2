# app/services/cart_service.py
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from app.models.product import Product
from app.repositories.product_repo import ProductRepository
from app.schemas.cart import (
    CartItemCreate,
    CartItemUpdate,
    CartState,
    ProductSnapshot,
)
from app.services.cart_store import CartStore

# The product page offers at most this many units per add
MAX_QUANTITY_PER_ADD = 10


class CartService:
    """
    Business logic for cart operations.

    Responsibilities:
      - validate product existence and active flag
      - enforce stock and variant (size / color) selection on add
      - snapshot the product into the cart line
      - drive the buyer's CartStore
    """

    def __init__(self, product_repo: ProductRepository):
        self.product_repo = product_repo

    # ---- internal helpers ----

    def _get_valid_product(self, session: Session, product_id: uuid.UUID) -> Product:
        product = self.product_repo.get_by_id(session, product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        if not product.is_active:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Product is inactive",
            )
        return product

    @staticmethod
    def _check_variant(options: list[str], chosen: str | None, label: str) -> None:
        if options and not chosen:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Please select a {label}",
            )
        if chosen and chosen not in options:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unknown {label} '{chosen}'",
            )

    # ---- public operations ----

    def get_cart(self, store: CartStore) -> CartState:
        return store.state

    def add_to_cart(
        self,
        session: Session,
        store: CartStore,
        payload: CartItemCreate,
    ) -> CartState:
        """
        Add a product (with its chosen size / color) to the cart.

        Rules:
          - product must exist and be active
          - product must be in stock
          - quantity <= min(MAX_QUANTITY_PER_ADD, stock_quantity)
          - size / color required when the product offers any, and must be
            one of the offered values
        """
        product = self._get_valid_product(session, payload.product_id)

        if product.stock_quantity <= 0:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Product is out of stock",
            )

        if payload.quantity > min(MAX_QUANTITY_PER_ADD, product.stock_quantity):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Not enough stock available",
            )

        self._check_variant(product.sizes, payload.size, "size")
        self._check_variant(product.colors, payload.color, "color")

        snapshot = ProductSnapshot.model_validate(product, from_attributes=True)
        return store.add_item(snapshot, payload.quantity, payload.size, payload.color)

    def update_quantity(
        self,
        store: CartStore,
        product_id: uuid.UUID,
        payload: CartItemUpdate,
    ) -> CartState:
        """
        Set the absolute quantity of a line; quantity <= 0 removes it.
        """
        return store.update_quantity(
            product_id, payload.quantity, payload.size, payload.color
        )

    def remove_item(
        self,
        store: CartStore,
        product_id: uuid.UUID,
        size: str | None = None,
        color: str | None = None,
    ) -> CartState:
        return store.remove_item(product_id, size or None, color or None)

    def clear_cart(self, store: CartStore) -> CartState:
        return store.clear_cart()
