# app/routers/checkout.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.core.auth import get_current_user
from app.core.cart_session import get_cart_store
from app.database import get_session
from app.models.user import User
from app.repositories.delivery_repo import DeliveryPriceRepository
from app.repositories.order_repo import OrderRepository
from app.schemas.order import CheckoutForm, CheckoutQuote, CheckoutResult
from app.services.cart_store import CartStore
from app.services.checkout_service import CheckoutService
from app.services.notification_service import OrderNotifier, get_order_notifier

router = APIRouter(prefix="/checkout", tags=["Checkout"])

order_repo = OrderRepository()
delivery_repo = DeliveryPriceRepository()
service = CheckoutService(order_repo, delivery_repo)


@router.get("/quote", response_model=CheckoutQuote)
def get_quote(
    governorate: str | None = None,
    session: Session = Depends(get_session),
    store: CartStore = Depends(get_cart_store),
):
    """
    Price breakdown for the current cart:
    subtotal, delivery fee for `governorate`, 8% tax and total.
    """
    return service.quote(session, store.state, governorate)


@router.post(
    "",
    response_model=CheckoutResult,
    status_code=status.HTTP_201_CREATED,
)
def checkout(
    payload: CheckoutForm,
    session: Session = Depends(get_session),
    store: CartStore = Depends(get_cart_store),
    notifier: OrderNotifier = Depends(get_order_notifier),
    current_user: User | None = Depends(get_current_user),
):
    """
    Place an order from the buyer's cart.

    Auth:
      - Optional. Signed-in buyers get the order linked to their profile.

    On success the cart is cleared and `confirmation_path` points at the
    order confirmation page.
    """
    return service.place_order(session, store, payload, notifier, current_user)
