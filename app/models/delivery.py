# app/models/delivery.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class GovernorateDeliveryPrice(SQLModel, table=True):
    """
    Flat delivery fee per Egyptian governorate.

    Checkout looks rows up by exact governorate name; inactive rows are
    ignored (the buyer pays no delivery fee for them).
    """

    __tablename__ = "governorate_delivery_prices"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    governorate: str = Field(
        unique=True,
        index=True,
        description="Governorate name as shown in the checkout form",
    )

    delivery_price: float = Field(
        default=0,
        ge=0,
        description="Delivery fee (EGP)",
    )

    is_active: bool = Field(default=True, index=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
