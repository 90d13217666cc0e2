# app/services/order_service.py
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from app.models.order import Order, OrderItem
from app.repositories.order_repo import OrderRepository
from app.repositories.product_repo import ProductRepository
from app.schemas.order import OrderItemRead, OrderWithItemsRead
from app.services.checkout_service import TAX_RATE


class OrderService:
    """
    Read side of orders for the buyer (order history and confirmation page).
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ):
        self.order_repo = order_repo
        self.product_repo = product_repo

    def list_user_orders(
        self,
        session: Session,
        user_id: uuid.UUID,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Order]:
        """
        List orders for the given user, newest first (without items).
        """
        return self.order_repo.list_for_user(session, user_id, skip, limit)

    def get_user_order(
        self,
        session: Session,
        user_id: uuid.UUID,
        order_id: uuid.UUID,
    ) -> OrderWithItemsRead:
        """
        Get a single order for the user, including items.

        - 404 if order not found or does not belong to this user.
        """
        order = self.order_repo.get_by_id(session, order_id)
        if not order or order.user_id != user_id:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Order not found",
            )

        items = self.order_repo.list_items_for_order(session, order.id)
        return self._build_order_with_items_dto(session, order, items)

    # -------- Helper DTO builder --------

    def _build_order_with_items_dto(
        self,
        session: Session,
        order: Order,
        items: list[OrderItem],
    ) -> OrderWithItemsRead:
        """
        Compose OrderWithItemsRead from ORM models, including subtotal,
        delivery fee and tax.
        """
        products = self.product_repo.get_many(
            session, list({it.product_id for it in items})
        )
        names = {p.id: p.name for p in products}

        item_dtos: list[OrderItemRead] = []
        subtotal = 0.0

        for it in items:
            line_total = it.quantity * it.price
            subtotal += line_total
            item_dtos.append(
                OrderItemRead(
                    id=it.id,
                    order_id=it.order_id,
                    product_id=it.product_id,
                    product_name=names.get(it.product_id),
                    quantity=it.quantity,
                    price=it.price,
                    size=it.size,
                    color=it.color,
                    line_total=line_total,
                )
            )

        delivery_price = float(order.shipping_address.get("deliveryPrice") or 0.0)

        return OrderWithItemsRead(
            id=order.id,
            user_id=order.user_id,
            status=order.status,
            total_amount=order.total_amount,
            shipping_address=order.shipping_address,
            billing_address=order.billing_address,
            payment_status=order.payment_status,
            payment_method=order.payment_method,
            created_at=order.created_at,
            updated_at=order.updated_at,
            items=item_dtos,
            subtotal=subtotal,
            delivery_price=delivery_price,
            tax_amount=subtotal * TAX_RATE,
        )
