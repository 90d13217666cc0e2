# app/models/product.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, JSON
from sqlmodel import SQLModel, Field


class Category(SQLModel, table=True):
    """
    Product category (e.g. "Men", "Accessories").
    """

    __tablename__ = "categories"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(max_length=100)

    slug: str = Field(
        max_length=255,
        unique=True,
        index=True,
        description="URL-friendly identifier (unique)",
    )

    description: str | None = None
    image_url: str | None = None

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class Product(SQLModel, table=True):
    """
    Product catalog entry.

    sizes / colors are the variant options a buyer must choose from
    before adding the product to the cart (empty list => no choice).
    """

    __tablename__ = "products"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        max_length=255,
        index=True,
        description="Display name of the product",
    )

    slug: str = Field(
        max_length=255,
        unique=True,
        index=True,
        description="URL-friendly identifier (unique)",
    )

    description: str | None = Field(
        default=None,
        description="Optional long description",
    )

    price: float = Field(
        ge=0,
        description="Unit price (EGP)",
    )

    compare_price: float | None = Field(
        default=None,
        description="Previous price shown struck through, if any",
    )

    category_id: uuid.UUID | None = Field(
        default=None,
        foreign_key="categories.id",
        index=True,
    )

    images: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    sizes: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    colors: list[str] = Field(default_factory=list, sa_column=Column(JSON))

    stock_quantity: int = Field(
        default=0,
        ge=0,
        description="How many units currently in stock",
    )

    is_featured: bool = Field(default=False, index=True)

    is_active: bool = Field(
        default=True,
        index=True,
        description="Whether this product is visible on the storefront",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class HeroSection(SQLModel, table=True):
    """
    Banner shown at the top of the storefront home page.
    Only one row is expected to be active at a time.
    """

    __tablename__ = "hero_sections"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    title: str
    subtitle: str | None = None
    background_image_url: str | None = None

    primary_button_text: str = "Shop Now"
    primary_button_link: str = "/products"
    secondary_button_text: str = "Browse Categories"
    secondary_button_link: str = "/categories"

    is_active: bool = Field(default=True, index=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
