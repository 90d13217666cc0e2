# app/schemas/cart.py
import uuid

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


def _blank_to_none(v: str | None) -> str | None:
    """A variant left unselected arrives as "" from the storefront form."""
    if v is None:
        return None
    v = v.strip()
    return v or None


class ProductSnapshot(SQLModel):
    """
    Copy of the product row taken when the line was added to the cart.

    The cart never re-reads the catalog: totals use this price until the
    buyer removes and re-adds the product.
    """

    model_config = ConfigDict(extra="ignore")

    id: uuid.UUID
    name: str
    slug: str
    price: float
    compare_price: float | None = None
    images: list[str] = Field(default_factory=list)
    sizes: list[str] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)
    stock_quantity: int = 0
    is_featured: bool = False
    is_active: bool = True


class CartItem(SQLModel):
    """
    One cart line. Identity key = (product.id, size, color).
    """

    product: ProductSnapshot
    quantity: int = Field(gt=0)
    size: str | None = None
    color: str | None = None

    def matches(
        self,
        product_id: uuid.UUID,
        size: str | None,
        color: str | None,
    ) -> bool:
        return (
            self.product.id == product_id
            and self.size == size
            and self.color == color
        )

    @property
    def line_total(self) -> float:
        return self.product.price * self.quantity


class CartState(SQLModel):
    """
    Cart contents plus projections recomputed from `items` on every change.
    """

    items: list[CartItem] = Field(default_factory=list)
    total: float = 0.0
    item_count: int = 0


class CartItemCreate(SQLModel):
    """
    Payload for adding a product (with optional variant) to the cart.
    """

    model_config = ConfigDict(extra="forbid")

    product_id: uuid.UUID
    quantity: int = Field(default=1, gt=0)
    size: str | None = None
    color: str | None = None

    @field_validator("size", "color")
    @classmethod
    def normalize_variant(cls, v: str | None) -> str | None:
        return _blank_to_none(v)


class CartItemUpdate(SQLModel):
    """
    Payload for setting the absolute quantity of a cart line.

    quantity <= 0 removes the line.
    """

    model_config = ConfigDict(extra="forbid")

    quantity: int
    size: str | None = None
    color: str | None = None

    @field_validator("size", "color")
    @classmethod
    def normalize_variant(cls, v: str | None) -> str | None:
        return _blank_to_none(v)
