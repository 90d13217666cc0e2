# app/schemas/order.py
import re
import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator
from pydantic.alias_generators import to_camel
from sqlmodel import SQLModel

OrderStatus = Literal["pending", "processing", "shipped", "delivered", "cancelled"]
PaymentStatus = Literal["pending", "paid", "failed"]
PaymentMethod = Literal["cash_on_delivery", "credit_card"]

PHONE_DIGITS = 11

_NON_DIGITS = re.compile(r"\D")


def sanitize_phone(value: str) -> str:
    """Drop every non-digit character, the way the phone input does while typing."""
    return _NON_DIGITS.sub("", value)


class ShippingAddress(BaseModel):
    """
    Delivery details stored on the order.

    Serialized with camelCase keys (fullName, alternativePhone, zipCode,
    deliveryPrice, ...) and used for both shipping_address and
    billing_address.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    full_name: str
    phone: str
    alternative_phone: str | None = None
    address: str
    city: str
    governorate: str
    zip_code: str | None = None
    country: str
    delivery_price: float = 0.0

    def to_blob(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class CheckoutForm(SQLModel):
    """
    Shipping form submitted at checkout.

    Phone fields are reduced to their digits on input; length rules are
    enforced by the checkout service so each failure gets its own message.
    """

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    full_name: str
    phone: str
    alternative_phone: str | None = None
    address: str
    city: str
    governorate: str = ""
    zip_code: str | None = None
    country: str = "Egypt"
    payment_method: PaymentMethod = "cash_on_delivery"

    @field_validator("phone", "alternative_phone", mode="before")
    @classmethod
    def digits_only(cls, v):
        if v is None:
            return v
        return sanitize_phone(str(v))

    @field_validator("full_name", "address", "city", "country")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v

    @field_validator("governorate")
    @classmethod
    def strip_governorate(cls, v: str) -> str:
        return v.strip()

    @field_validator("alternative_phone", "zip_code")
    @classmethod
    def empty_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None


class CheckoutQuote(SQLModel):
    """
    Price breakdown for the current cart and a governorate.
    """

    governorate: str | None
    item_count: int
    subtotal: float
    delivery_price: float
    tax: float
    total: float


class CheckoutResult(SQLModel):
    """
    Confirmation returned after the order has been persisted.
    """

    order_id: uuid.UUID
    status: OrderStatus
    payment_status: PaymentStatus
    payment_method: PaymentMethod
    item_count: int
    subtotal: float
    delivery_price: float
    tax: float
    total_amount: float
    confirmation_path: str


class OrderRead(SQLModel):
    """
    Lightweight representation of an order (without items).
    """

    id: uuid.UUID
    user_id: uuid.UUID | None
    status: OrderStatus
    total_amount: float
    shipping_address: ShippingAddress
    billing_address: ShippingAddress
    payment_status: PaymentStatus
    payment_method: str | None
    created_at: datetime
    updated_at: datetime


class OrderItemRead(SQLModel):
    """
    Representation of a single order line item.
    """

    id: uuid.UUID
    order_id: uuid.UUID
    product_id: uuid.UUID
    product_name: str | None = None
    quantity: int
    price: float
    size: str | None = None
    color: str | None = None
    line_total: float


class OrderWithItemsRead(OrderRead):
    """
    Full order view including items, as shown on the confirmation page.
    """

    items: list[OrderItemRead]
    subtotal: float
    delivery_price: float
    tax_amount: float
