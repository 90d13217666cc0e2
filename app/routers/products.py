# app/routers/products.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.database import get_session
from app.repositories.product_repo import (
    CategoryRepository,
    HeroSectionRepository,
    ProductRepository,
)
from app.schemas.product import ProductRead
from app.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])

repo = ProductRepository()
service = ProductService(repo, CategoryRepository(), HeroSectionRepository())


@router.get("", response_model=list[ProductRead])
def list_products(
    session: Session = Depends(get_session),
    skip: int = 0,
    limit: int = 50,
    featured: bool = False,
):
    """
    List active products, newest first.

    - `featured=true` restricts to featured products (home page).
    """
    return service.list_products(
        session, skip=skip, limit=limit, featured_only=featured
    )


@router.get("/search", response_model=list[ProductRead])
def search_products(
    q: str = "",
    session: Session = Depends(get_session),
):
    """
    Search active products by name or description (case-insensitive).
    An empty query returns no products.
    """
    return service.search_products(session, q)


@router.get("/slug/{slug}", response_model=ProductRead)
def get_product_by_slug(
    slug: str,
    session: Session = Depends(get_session),
):
    """
    Product page lookup. Inactive products are 404.
    """
    return service.get_product_by_slug(session, slug)


@router.get("/{product_id}", response_model=ProductRead)
def get_product(
    product_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Get a single product by id.
    """
    return service.get_product(session, product_id)
