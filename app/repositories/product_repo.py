# app/repositories/product_repo.py
import uuid

from sqlmodel import Session, col, or_, select

from app.models.product import Category, HeroSection, Product


class ProductRepository:
    """
    Data access layer for Product.

    - Pure DB operations (queries only; the storefront never writes products).
    - No FastAPI, no business logic.
    """

    def get_by_id(self, session: Session, product_id: uuid.UUID) -> Product | None:
        return session.get(Product, product_id)

    def get_active_by_id(self, session: Session, product_id: uuid.UUID) -> Product | None:
        stmt = select(Product).where(
            Product.id == product_id,
            Product.is_active == True,  # noqa: E712
        )
        return session.exec(stmt).first()

    def get_by_slug(self, session: Session, slug: str) -> Product | None:
        stmt = select(Product).where(
            Product.slug == slug,
            Product.is_active == True,  # noqa: E712
        )
        return session.exec(stmt).first()

    def get_many(
        self,
        session: Session,
        product_ids: list[uuid.UUID],
    ) -> list[Product]:
        if not product_ids:
            return []
        stmt = select(Product).where(col(Product.id).in_(product_ids))
        return list(session.exec(stmt).all())

    def list_active(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 50,
        featured_only: bool = False,
    ) -> list[Product]:
        stmt = select(Product).where(Product.is_active == True)  # noqa: E712
        if featured_only:
            stmt = stmt.where(Product.is_featured == True)  # noqa: E712
        stmt = (
            stmt.order_by(col(Product.created_at).desc())
            .offset(skip)
            .limit(limit)
        )
        return list(session.exec(stmt).all())

    def search(self, session: Session, query: str) -> list[Product]:
        """
        Case-insensitive substring match on name or description.
        """
        pattern = f"%{query}%"
        stmt = (
            select(Product)
            .where(Product.is_active == True)  # noqa: E712
            .where(
                or_(
                    col(Product.name).ilike(pattern),
                    col(Product.description).ilike(pattern),
                )
            )
            .order_by(col(Product.created_at).desc())
        )
        return list(session.exec(stmt).all())

    def list_for_category(
        self,
        session: Session,
        category_id: uuid.UUID,
        min_price: float | None = None,
        max_price: float | None = None,
        in_stock: bool = False,
        sort_by: str | None = None,
    ) -> list[Product]:
        stmt = select(Product).where(
            Product.category_id == category_id,
            Product.is_active == True,  # noqa: E712
        )

        if min_price is not None:
            stmt = stmt.where(Product.price >= min_price)
        if max_price is not None:
            stmt = stmt.where(Product.price <= max_price)
        if in_stock:
            stmt = stmt.where(Product.stock_quantity > 0)

        if sort_by == "price-asc":
            stmt = stmt.order_by(col(Product.price).asc())
        elif sort_by == "price-desc":
            stmt = stmt.order_by(col(Product.price).desc())
        else:
            stmt = stmt.order_by(col(Product.created_at).desc())

        return list(session.exec(stmt).all())


class CategoryRepository:
    """
    Data access layer for Category.
    """

    def list_all(self, session: Session, limit: int = 50) -> list[Category]:
        stmt = select(Category).order_by(Category.name).limit(limit)
        return list(session.exec(stmt).all())

    def get_by_slug(self, session: Session, slug: str) -> Category | None:
        stmt = select(Category).where(Category.slug == slug)
        return session.exec(stmt).first()


class HeroSectionRepository:
    """
    Data access layer for the home page hero banner.
    """

    def get_active(self, session: Session) -> HeroSection | None:
        stmt = (
            select(HeroSection)
            .where(HeroSection.is_active == True)  # noqa: E712
            .order_by(col(HeroSection.updated_at).desc())
        )
        return session.exec(stmt).first()
