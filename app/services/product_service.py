# app/services/product_service.py
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from app.models.product import Category, Product
from app.repositories.product_repo import (
    CategoryRepository,
    HeroSectionRepository,
    ProductRepository,
)
from app.schemas.product import (
    CategoryProductsRead,
    CategoryRead,
    HeroSectionRead,
    ProductRead,
)

# Shown when no hero section is active
DEFAULT_HERO = HeroSectionRead(
    title="Premium Style, Exceptional Quality",
    subtitle="Discover our latest collection of premium clothing and accessories",
    background_image_url="/placeholder.svg?height=600&width=1200",
    primary_button_text="Shop Now",
    primary_button_link="/products",
    secondary_button_text="Browse Categories",
    secondary_button_link="/categories",
)


class ProductService:
    """
    Storefront catalog: products, categories and the home page hero.

    Read-only; catalog editing belongs to the admin console.
    """

    def __init__(
        self,
        repo: ProductRepository,
        category_repo: CategoryRepository,
        hero_repo: HeroSectionRepository,
    ):
        self.repo = repo
        self.category_repo = category_repo
        self.hero_repo = hero_repo

    # ----- Products -----

    def list_products(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 50,
        featured_only: bool = False,
    ) -> list[Product]:
        return self.repo.list_active(
            session, skip=skip, limit=limit, featured_only=featured_only
        )

    def search_products(self, session: Session, query: str) -> list[Product]:
        query = query.strip()
        if not query:
            return []
        return self.repo.search(session, query)

    def get_product(self, session: Session, product_id: uuid.UUID) -> Product:
        product = self.repo.get_active_by_id(session, product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        return product

    def get_product_by_slug(self, session: Session, slug: str) -> Product:
        product = self.repo.get_by_slug(session, slug)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        return product

    # ----- Categories -----

    def list_categories(self, session: Session, limit: int = 50) -> list[Category]:
        return self.category_repo.list_all(session, limit=limit)

    def get_category(self, session: Session, slug: str) -> Category:
        category = self.category_repo.get_by_slug(session, slug)
        if not category:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Category not found",
            )
        return category

    def get_category_products(
        self,
        session: Session,
        slug: str,
        min_price: float | None = None,
        max_price: float | None = None,
        in_stock: bool = False,
        sort_by: str | None = None,
    ) -> CategoryProductsRead:
        """
        Category page: filtered products plus their price range.
        An empty result reports a 0..0 range.
        """
        category = self.get_category(session, slug)
        products = self.repo.list_for_category(
            session,
            category.id,
            min_price=min_price,
            max_price=max_price,
            in_stock=in_stock,
            sort_by=sort_by,
        )
        prices = [p.price for p in products]

        return CategoryProductsRead(
            category=CategoryRead.model_validate(category, from_attributes=True),
            products=[
                ProductRead.model_validate(p, from_attributes=True) for p in products
            ],
            min_price=min(prices, default=0.0),
            max_price=max(prices, default=0.0),
        )

    # ----- Hero -----

    def get_hero(self, session: Session) -> HeroSectionRead:
        hero = self.hero_repo.get_active(session)
        if hero is None:
            return DEFAULT_HERO
        return HeroSectionRead.model_validate(hero, from_attributes=True)
