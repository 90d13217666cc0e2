# app/schemas/notification.py
import uuid
from datetime import datetime

from sqlmodel import SQLModel

from app.schemas.order import ShippingAddress


class NotificationItem(SQLModel):
    """
    Ordered line with the product name copied in, so the email needs no
    catalog lookup.
    """

    product_name: str
    quantity: int
    price: float
    size: str | None = None
    color: str | None = None

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class OrderNotification(SQLModel):
    """
    Everything the new-order alert shows to the shop owner.
    """

    order_id: uuid.UUID
    order_date: datetime
    customer_name: str
    customer_email: str
    customer_phone: str
    total_amount: float
    payment_method: str
    shipping_address: ShippingAddress
    items: list[NotificationItem]

    @property
    def short_id(self) -> str:
        return str(self.order_id)[:8]
