# app/services/checkout_service.py
import logging

from fastapi import HTTPException, status
from sqlmodel import Session

from app.models.delivery import GovernorateDeliveryPrice
from app.models.order import Order, OrderItem
from app.models.user import User
from app.repositories.delivery_repo import DeliveryPriceRepository
from app.repositories.order_repo import OrderRepository
from app.schemas.cart import CartState
from app.schemas.notification import NotificationItem, OrderNotification
from app.schemas.order import (
    PHONE_DIGITS,
    CheckoutForm,
    CheckoutQuote,
    CheckoutResult,
    ShippingAddress,
)
from app.services.cart_store import CartStore
from app.services.notification_service import OrderNotifier

logger = logging.getLogger(__name__)

# Fixed tax rate (8%)
TAX_RATE = 0.08

PLACE_ORDER_FAILED = "Failed to place order. Please try again."


def compute_order_totals(subtotal: float, delivery_price: float) -> tuple[float, float]:
    """
    Return (tax, total) for a cart subtotal and a delivery fee.

        tax   = subtotal * 8%
        total = subtotal + delivery + tax
    """
    tax = subtotal * TAX_RATE
    total = subtotal + delivery_price + tax
    return tax, total


def validate_checkout_form(form: CheckoutForm) -> None:
    """
    Reject the form before anything is written. Checks run in a fixed
    order and the first failure wins.
    """
    if len(form.phone) != PHONE_DIGITS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Phone number must be exactly {PHONE_DIGITS} digits",
        )

    if form.alternative_phone and len(form.alternative_phone) != PHONE_DIGITS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Alternative phone number must be exactly {PHONE_DIGITS} digits",
        )

    if not form.governorate:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please select a governorate",
        )


class CheckoutService:
    """
    Turns the buyer's cart and shipping form into a persisted order.

    Sequence for place_order:
      1. Refuse an empty cart; validate the form.
      2. Look up the governorate delivery fee and compute totals.
      3. Insert the order and its items in ONE transaction.
      4. Notify the shop (best effort, result only logged).
      5. Clear the cart and return the confirmation.

    If step 3 fails nothing is written and the cart is left as it was,
    so the buyer can resubmit.
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        delivery_repo: DeliveryPriceRepository,
    ):
        self.order_repo = order_repo
        self.delivery_repo = delivery_repo

    # ---- delivery pricing ----

    def list_delivery_prices(self, session: Session) -> list[GovernorateDeliveryPrice]:
        return self.delivery_repo.list_active(session)

    def get_delivery_price(self, session: Session, governorate: str | None) -> float:
        """Fee for the governorate's active row, or 0 if there is none."""
        governorate = (governorate or "").strip()
        if not governorate:
            return 0.0
        row = self.delivery_repo.get_active_by_governorate(session, governorate)
        return row.delivery_price if row else 0.0

    def quote(
        self,
        session: Session,
        cart: CartState,
        governorate: str | None = None,
    ) -> CheckoutQuote:
        governorate = (governorate or "").strip()
        delivery_price = self.get_delivery_price(session, governorate)
        tax, total = compute_order_totals(cart.total, delivery_price)
        return CheckoutQuote(
            governorate=governorate or None,
            item_count=cart.item_count,
            subtotal=cart.total,
            delivery_price=delivery_price,
            tax=tax,
            total=total,
        )

    # ---- order placement ----

    def place_order(
        self,
        session: Session,
        store: CartStore,
        payload: CheckoutForm,
        notifier: OrderNotifier,
        user: User | None = None,
    ) -> CheckoutResult:
        cart = store.state
        if not cart.items:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cart is empty",
            )

        validate_checkout_form(payload)

        delivery_price = self.get_delivery_price(session, payload.governorate)
        subtotal = cart.total
        tax, total = compute_order_totals(subtotal, delivery_price)

        address = ShippingAddress(
            full_name=payload.full_name,
            phone=payload.phone,
            alternative_phone=payload.alternative_phone,
            address=payload.address,
            city=payload.city,
            governorate=payload.governorate,
            zip_code=payload.zip_code,
            country=payload.country,
            delivery_price=delivery_price,
        )
        address_blob = address.to_blob()

        payment_status = (
            "pending" if payload.payment_method == "cash_on_delivery" else "paid"
        )

        try:
            order = self.order_repo.create_order(
                session,
                Order(
                    user_id=user.id if user else None,
                    status="pending",
                    total_amount=total,
                    shipping_address=address_blob,
                    billing_address=dict(address_blob),
                    payment_status=payment_status,
                    payment_method=payload.payment_method,
                ),
            )
            self.order_repo.create_items(
                session,
                order.id,
                [
                    OrderItem(
                        product_id=item.product.id,
                        quantity=item.quantity,
                        price=item.product.price,
                        size=item.size,
                        color=item.color,
                    )
                    for item in cart.items
                ],
            )
            session.commit()
            session.refresh(order)
        except Exception as exc:
            session.rollback()
            logger.exception("Error placing order")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=PLACE_ORDER_FAILED,
            ) from exc

        logger.info(
            "Order #%s placed: %d lines, total %.2f",
            str(order.id)[:8],
            len(cart.items),
            total,
        )

        self._send_notification(notifier, order, payload, address, cart, total)

        store.clear_cart()

        return CheckoutResult(
            order_id=order.id,
            status=order.status,
            payment_status=order.payment_status,
            payment_method=payload.payment_method,
            item_count=cart.item_count,
            subtotal=subtotal,
            delivery_price=delivery_price,
            tax=tax,
            total_amount=total,
            confirmation_path=f"/orders/{order.id}",
        )

    def _send_notification(
        self,
        notifier: OrderNotifier,
        order: Order,
        payload: CheckoutForm,
        address: ShippingAddress,
        cart: CartState,
        total: float,
    ) -> None:
        """
        Best effort: the order is already committed, so any failure here
        is logged and swallowed.
        """
        notification = OrderNotification(
            order_id=order.id,
            order_date=order.created_at,
            customer_name=payload.full_name,
            customer_email=payload.email,
            customer_phone=payload.phone,
            total_amount=total,
            payment_method=payload.payment_method,
            shipping_address=address,
            items=[
                NotificationItem(
                    product_name=item.product.name,
                    quantity=item.quantity,
                    price=item.product.price,
                    size=item.size,
                    color=item.color,
                )
                for item in cart.items
            ],
        )
        try:
            sent = notifier.notify_order_placed(notification)
        except Exception:
            logger.exception(
                "Error sending order #%s notification", notification.short_id
            )
            return

        if sent:
            logger.info("Order #%s notification sent", notification.short_id)
        else:
            logger.error("Failed to send order #%s notification", notification.short_id)
