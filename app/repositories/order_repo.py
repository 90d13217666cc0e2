# app/repositories/order_repo.py
import uuid

from sqlmodel import Session, col, select

from app.models.order import Order, OrderItem


class OrderRepository:
    """
    Orders and their lines.

    Writes only flush: checkout inserts the order and its lines in one
    transaction and owns the commit / rollback.
    """

    def get_by_id(self, session: Session, order_id: uuid.UUID) -> Order | None:
        return session.get(Order, order_id)

    def list_for_user(
        self,
        session: Session,
        user_id: uuid.UUID,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Order]:
        """Newest first."""
        stmt = (
            select(Order)
            .where(Order.user_id == user_id)
            .order_by(col(Order.created_at).desc())
            .offset(skip)
            .limit(limit)
        )
        return list(session.exec(stmt).all())

    def list_items_for_order(
        self,
        session: Session,
        order_id: uuid.UUID,
    ) -> list[OrderItem]:
        stmt = (
            select(OrderItem)
            .where(OrderItem.order_id == order_id)
            .order_by(col(OrderItem.created_at))
        )
        return list(session.exec(stmt).all())

    def create_order(self, session: Session, order: Order) -> Order:
        session.add(order)
        session.flush()
        session.refresh(order)
        return order

    def create_items(
        self,
        session: Session,
        order_id: uuid.UUID,
        items: list[OrderItem],
    ) -> list[OrderItem]:
        """Attach `items` to the order and insert them."""
        for item in items:
            item.order_id = order_id
        session.add_all(items)
        session.flush()
        return items
