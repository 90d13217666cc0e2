# app/schemas/delivery.py
import uuid

from sqlmodel import SQLModel


class DeliveryPriceRead(SQLModel):
    """
    Governorate option offered in the checkout form.
    """

    id: uuid.UUID
    governorate: str
    delivery_price: float
