# app/services/notification_service.py
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from html import escape

import httpx

from app.core.config import get_settings
from app.core.email_client import EmailSendError, is_email_configured, send_email
from app.schemas.notification import OrderNotification

logger = logging.getLogger(__name__)

CURRENCY = "EGP"

PAYMENT_METHOD_LABELS: dict[str, str] = {
    "cash_on_delivery": "Cash on Delivery",
    "credit_card": "Credit Card",
}


class OrderNotifier(ABC):
    """
    Tells the shop that an order was placed.

    Implementations report success as a bool and must not raise: checkout
    logs the result and carries on either way.
    """

    @abstractmethod
    def notify_order_placed(self, notification: OrderNotification) -> bool:
        ...


class LoggingOrderNotifier(OrderNotifier):
    """Used when no email API key is configured."""

    def notify_order_placed(self, notification: OrderNotification) -> bool:
        logger.info(
            "📧 New order #%s from %s <%s>, total %.2f %s (email disabled)",
            notification.short_id,
            notification.customer_name,
            notification.customer_email,
            notification.total_amount,
            CURRENCY,
        )
        return True


class EmailOrderNotifier(OrderNotifier):
    """
    Sends the HTML order summary to the shop owner's inbox.
    One attempt, no retry.
    """

    def __init__(
        self,
        recipient: str,
        client: httpx.Client | None = None,
    ):
        self.recipient = recipient
        self.client = client

    def notify_order_placed(self, notification: OrderNotification) -> bool:
        subject = f"🛍️ New Order #{notification.short_id} - StyleCo"
        html = render_order_email_html(notification)

        try:
            email_id = send_email(
                to=self.recipient,
                subject=subject,
                html=html,
                client=self.client,
            )
        except EmailSendError as exc:
            logger.error(
                "❌ Email API rejected order #%s notification (status=%s): %s",
                notification.short_id,
                exc.status_code,
                exc.message,
            )
            return False
        except (httpx.HTTPError, RuntimeError) as exc:
            logger.error(
                "❌ Could not send order #%s notification: %s",
                notification.short_id,
                exc,
            )
            return False

        logger.info(
            "✅ Order #%s notification sent (email id %s)",
            notification.short_id,
            email_id,
        )
        return True


def get_order_notifier() -> OrderNotifier:
    """
    FastAPI dependency selecting the notifier from settings.
    """
    settings = get_settings()
    if is_email_configured() and settings.ORDER_NOTIFICATION_EMAIL:
        return EmailOrderNotifier(settings.ORDER_NOTIFICATION_EMAIL)
    return LoggingOrderNotifier()


# ---------------------------------------------------------------------------
# HTML rendering
# ---------------------------------------------------------------------------


def _money(amount: float) -> str:
    return f"{amount:.2f} {CURRENCY}"


def _info_row(label: str, value: str) -> str:
    return (
        '<tr><td style="padding:6px 12px;color:#64748b;font-size:12px;'
        'text-transform:uppercase;font-weight:600;">'
        f"{escape(label)}</td>"
        '<td style="padding:6px 12px;color:#1e293b;font-weight:600;">'
        f"{escape(value)}</td></tr>"
    )


def _item_row(item) -> str:
    details = ""
    if item.size:
        details += f"<div>Size: <strong>{escape(item.size)}</strong></div>"
    if item.color:
        details += f"<div>Color: <strong>{escape(item.color)}</strong></div>"
    return (
        "<tr>"
        f'<td style="padding:12px;font-weight:600;">{escape(item.product_name)}</td>'
        f'<td style="padding:12px;color:#64748b;font-size:13px;">{details}</td>'
        f'<td style="padding:12px;text-align:center;">{item.quantity}</td>'
        f'<td style="padding:12px;">{_money(item.price)}</td>'
        f'<td style="padding:12px;font-weight:700;color:#059669;">'
        f"{_money(item.line_total)}</td>"
        "</tr>"
    )


def render_order_email_html(
    notification: OrderNotification,
    generated_at: datetime | None = None,
) -> str:
    """
    Build the new-order alert. Every user-supplied value is HTML-escaped.
    """
    generated_at = generated_at or datetime.now(timezone.utc)
    address = notification.shipping_address
    payment_label = PAYMENT_METHOD_LABELS.get(
        notification.payment_method, notification.payment_method
    )

    customer_rows = [
        _info_row("Full Name", notification.customer_name),
        _info_row("Email Address", notification.customer_email),
        _info_row("Phone Number", notification.customer_phone),
    ]
    if address.alternative_phone:
        customer_rows.append(_info_row("Alternative Phone", address.alternative_phone))

    address_lines = [
        f'<p style="margin:0;font-weight:700;">{escape(address.address)}</p>',
        f'<p style="margin:8px 0 0 0;color:#64748b;">'
        f"{escape(address.city)}, {escape(address.governorate)}</p>",
        f'<p style="margin:4px 0 0 0;color:#64748b;">{escape(address.country)}</p>',
    ]
    if address.zip_code:
        address_lines.append(
            f'<p style="margin:4px 0 0 0;color:#64748b;">'
            f"Postal Code: {escape(address.zip_code)}</p>"
        )
    if address.delivery_price:
        address_lines.append(
            '<p style="margin:12px 0 0 0;color:#059669;font-weight:700;">'
            f"🚚 Delivery Fee: {_money(address.delivery_price)}</p>"
        )

    item_rows = "".join(_item_row(item) for item in notification.items)
    order_rows = "".join(
        [
            _info_row("Order ID", "#" + notification.short_id),
            _info_row("Order Date", notification.order_date.strftime("%a, %b %d %Y %H:%M")),
            _info_row("Payment Method", payment_label),
            _info_row("Items Count", f"{len(notification.items)} items"),
        ]
    )
    customer_html = "".join(customer_rows)
    address_html = "".join(address_lines)
    generated = generated_at.strftime("%Y-%m-%d %H:%M")

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>New Order Notification - StyleCo</title>
</head>
<body style="font-family:-apple-system,'Segoe UI',Roboto,sans-serif;background:#f8fafc;color:#333;padding:20px;">
  <div style="max-width:600px;margin:0 auto;background:#fff;border-radius:12px;overflow:hidden;">
    <div style="background:#667eea;color:#fff;padding:32px;text-align:center;">
      <h1 style="margin:0;">🛍️ New Order Alert!</h1>
      <p>StyleCo - You have received a new customer order</p>
    </div>
    <div style="padding:32px;">
      <p style="font-weight:600;">Order #{escape(notification.short_id)} is waiting for your confirmation</p>
      <div style="background:#10b981;color:#fff;padding:20px;border-radius:12px;font-size:24px;font-weight:700;text-align:center;">
        💰 Order Total: {_money(notification.total_amount)}
      </div>

      <h3>📋 Order Information</h3>
      <table>
        {order_rows}
      </table>

      <h3>👤 Customer Details</h3>
      <table>
        {customer_html}
      </table>

      <h3>📍 Delivery Address</h3>
      <div style="padding:16px;border-left:4px solid #0ea5e9;">
        {address_html}
      </div>

      <h3>🛒 Ordered Items</h3>
      <table style="width:100%;border-collapse:collapse;">
        <thead>
          <tr style="background:#1e293b;color:#fff;text-align:left;">
            <th style="padding:12px;">Product Name</th>
            <th style="padding:12px;">Details</th>
            <th style="padding:12px;">Qty</th>
            <th style="padding:12px;">Unit Price</th>
            <th style="padding:12px;">Total</th>
          </tr>
        </thead>
        <tbody>
          {item_rows}
        </tbody>
      </table>

      <p style="margin-top:24px;">📞 Contact customer at <strong>{escape(notification.customer_phone)}</strong> to confirm order details</p>
    </div>
    <div style="background:#1f2937;color:#d1d5db;padding:24px;text-align:center;font-size:12px;">
      StyleCo Admin Notification System<br>
      Generated {generated} UTC
    </div>
  </div>
</body>
</html>
"""
