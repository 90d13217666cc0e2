# app/routers/categories.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.database import get_session
from app.repositories.product_repo import (
    CategoryRepository,
    HeroSectionRepository,
    ProductRepository,
)
from app.schemas.product import CategoryProductsRead, CategoryRead, ProductSort
from app.services.product_service import ProductService

router = APIRouter(prefix="/categories", tags=["Categories"])

service = ProductService(ProductRepository(), CategoryRepository(), HeroSectionRepository())


@router.get("", response_model=list[CategoryRead])
def list_categories(
    session: Session = Depends(get_session),
    limit: int = 50,
):
    """
    List categories by name.
    """
    return service.list_categories(session, limit=limit)


@router.get("/{slug}", response_model=CategoryRead)
def get_category(
    slug: str,
    session: Session = Depends(get_session),
):
    return service.get_category(session, slug)


@router.get("/{slug}/products", response_model=CategoryProductsRead)
def get_category_products(
    slug: str,
    min_price: float | None = None,
    max_price: float | None = None,
    in_stock: bool = False,
    sort_by: ProductSort | None = None,
    session: Session = Depends(get_session),
):
    """
    Active products of a category.

    Filters:
      - min_price / max_price: inclusive price bounds
      - in_stock: only products with stock_quantity > 0
      - sort_by: price-asc | price-desc | newest (default newest)
    """
    return service.get_category_products(
        session,
        slug,
        min_price=min_price,
        max_price=max_price,
        in_stock=in_stock,
        sort_by=sort_by,
    )
