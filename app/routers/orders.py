# app/routers/orders.py
import uuid

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.core.auth import require_auth
from app.database import get_session
from app.models.user import User
from app.repositories.order_repo import OrderRepository
from app.repositories.product_repo import ProductRepository
from app.schemas.order import OrderRead, OrderWithItemsRead
from app.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])

service = OrderService(OrderRepository(), ProductRepository())


@router.get("/me", response_model=list[OrderRead])
def order_history(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    session: Session = Depends(get_session),
    buyer: User = Depends(require_auth),
):
    """
    Signed-in buyer's past orders, newest first. Guest orders are not
    linked to any profile and never show up here.
    """
    return service.list_user_orders(session, buyer.id, skip, limit)


@router.get("/me/{order_id}", response_model=OrderWithItemsRead)
def order_confirmation(
    order_id: uuid.UUID,
    session: Session = Depends(get_session),
    buyer: User = Depends(require_auth),
):
    """
    Order confirmation page: the order with its lines, subtotal, delivery
    fee and tax. Another buyer's order is reported as not found.
    """
    return service.get_user_order(session, buyer.id, order_id)
