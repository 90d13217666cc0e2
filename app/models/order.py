# app/models/order.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, JSON
from sqlmodel import SQLModel, Field


class Order(SQLModel, table=True):
    """
    Customer order, created once per checkout submission.

    shipping_address / billing_address hold the camelCase address blob
    produced by `ShippingAddress.to_blob()`; both carry identical content.
    """

    __tablename__ = "orders"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    # Guests may check out, so the owner is optional
    user_id: uuid.UUID | None = Field(
        default=None,
        foreign_key="users.id",
        index=True,
    )

    # pending | processing | shipped | delivered | cancelled
    status: str = Field(
        default="pending",
        index=True,
        description="Order status lifecycle",
    )

    # subtotal + delivery + tax (8%)
    total_amount: float = Field(
        description="Final amount for this order",
    )

    shipping_address: dict = Field(sa_column=Column(JSON, nullable=False))
    billing_address: dict = Field(sa_column=Column(JSON, nullable=False))

    # pending | paid | failed
    payment_status: str = Field(default="pending")
    payment_method: str | None = None

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class OrderItem(SQLModel, table=True):
    """
    Line item inside an order.

    price / size / color are copied from the cart line at purchase time
    and never follow later product edits.
    """

    __tablename__ = "order_items"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    order_id: uuid.UUID = Field(
        foreign_key="orders.id",
        index=True,
    )

    product_id: uuid.UUID = Field(
        foreign_key="products.id",
        index=True,
    )

    quantity: int = Field(
        gt=0,
        description="Quantity ordered (>=1)",
    )

    price: float = Field(
        description="Unit price at time of order (pre-tax)",
    )

    size: str | None = None
    color: str | None = None

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
