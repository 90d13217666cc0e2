# app/schemas/product.py
import uuid
from datetime import datetime
from typing import Literal

from sqlmodel import SQLModel

ProductSort = Literal["price-asc", "price-desc", "newest"]


class ProductRead(SQLModel):
    """
    Product representation for clients.
    """

    id: uuid.UUID
    name: str
    slug: str
    description: str | None = None
    price: float
    compare_price: float | None = None
    category_id: uuid.UUID | None = None
    images: list[str]
    sizes: list[str]
    colors: list[str]
    stock_quantity: int
    is_featured: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime


class CategoryRead(SQLModel):
    id: uuid.UUID
    name: str
    slug: str
    description: str | None = None
    image_url: str | None = None
    created_at: datetime
    updated_at: datetime


class CategoryProductsRead(SQLModel):
    """
    Category page payload: the category, its filtered products and the
    price range of those products (for the price slider).
    """

    category: CategoryRead
    products: list[ProductRead]
    min_price: float
    max_price: float


class HeroSectionRead(SQLModel):
    id: uuid.UUID | None = None
    title: str
    subtitle: str | None = None
    background_image_url: str | None = None
    primary_button_text: str
    primary_button_link: str
    secondary_button_text: str
    secondary_button_link: str
