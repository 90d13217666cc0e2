"""Tests for the email client, order notifiers and the order email."""

import json
import uuid
from datetime import datetime, timezone

import httpx
import pytest

from app.core.config import get_settings
from app.core.email_client import EmailSendError, send_email
from app.schemas.notification import NotificationItem, OrderNotification
from app.schemas.order import ShippingAddress
from app.services.notification_service import (
    EmailOrderNotifier,
    LoggingOrderNotifier,
    get_order_notifier,
    render_order_email_html,
)

ORDER_ID = uuid.UUID("1234abcd-0000-4000-8000-000000000000")


@pytest.fixture
def email_settings(monkeypatch):
    settings = get_settings()
    monkeypatch.setattr(settings, "EMAIL_API_KEY", "re_test_key")
    monkeypatch.setattr(settings, "EMAIL_API_URL", "https://email.test/emails")
    monkeypatch.setattr(settings, "EMAIL_FROM", "StyleCo <shop@styleco.test>")
    monkeypatch.setattr(settings, "ORDER_NOTIFICATION_EMAIL", "owner@styleco.test")
    return settings


def mock_client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def make_notification(**overrides) -> OrderNotification:
    values = {
        "order_id": ORDER_ID,
        "order_date": datetime(2026, 3, 1, 14, 30, tzinfo=timezone.utc),
        "customer_name": "Mona Adel",
        "customer_email": "buyer@example.com",
        "customer_phone": "01012345678",
        "total_amount": 651.27,
        "payment_method": "cash_on_delivery",
        "shipping_address": ShippingAddress(
            full_name="Mona Adel",
            phone="01012345678",
            address="12 Nile St",
            city="Cairo",
            governorate="Cairo",
            country="Egypt",
            delivery_price=30.0,
        ),
        "items": [
            NotificationItem(product_name="Linen Shirt", quantity=2, price=200.0, size="M"),
            NotificationItem(product_name="Socks", quantity=1, price=175.25),
        ],
    }
    values.update(overrides)
    return OrderNotification(**values)


# ---- send_email ----


def test_send_email_posts_payload_with_bearer(email_settings):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "email_123"})

    email_id = send_email(
        to="owner@styleco.test",
        subject="Hello",
        html="<p>Hi</p>",
        client=mock_client(handler),
    )

    assert email_id == "email_123"
    assert seen["url"] == "https://email.test/emails"
    assert seen["auth"] == "Bearer re_test_key"
    assert seen["body"] == {
        "from": "StyleCo <shop@styleco.test>",
        "to": ["owner@styleco.test"],
        "subject": "Hello",
        "html": "<p>Hi</p>",
    }


@pytest.mark.parametrize(
    "status_code, body, message",
    [
        (401, {}, "Invalid API key"),
        (422, {}, "Invalid email format or missing required fields"),
        (403, {"message": "Domain not verified"}, "Domain not verified"),
        (500, {"error": "upstream"}, "upstream"),
        (200, {}, "Unknown error"),
    ],
)
def test_send_email_errors(email_settings, status_code, body, message):
    client = mock_client(lambda request: httpx.Response(status_code, json=body))

    with pytest.raises(EmailSendError) as exc_info:
        send_email(to="a@b.test", subject="s", html="h", client=client)

    assert exc_info.value.message == message
    assert exc_info.value.status_code == status_code


def test_send_email_requires_api_key(monkeypatch):
    monkeypatch.setattr(get_settings(), "EMAIL_API_KEY", None)

    with pytest.raises(RuntimeError):
        send_email(to="a@b.test", subject="s", html="h")


# ---- notifiers ----


def test_email_notifier_sends_order_summary(email_settings):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "email_456"})

    notifier = EmailOrderNotifier("owner@styleco.test", client=mock_client(handler))

    assert notifier.notify_order_placed(make_notification()) is True
    assert seen["body"]["to"] == ["owner@styleco.test"]
    assert seen["body"]["subject"] == "🛍️ New Order #1234abcd - StyleCo"
    assert "Linen Shirt" in seen["body"]["html"]


def test_email_notifier_reports_rejection(email_settings):
    client = mock_client(lambda request: httpx.Response(401, json={}))

    notifier = EmailOrderNotifier("owner@styleco.test", client=client)

    assert notifier.notify_order_placed(make_notification()) is False


def test_email_notifier_reports_network_error(email_settings):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    notifier = EmailOrderNotifier("owner@styleco.test", client=mock_client(handler))

    assert notifier.notify_order_placed(make_notification()) is False


def test_logging_notifier_always_succeeds(caplog):
    with caplog.at_level("INFO"):
        assert LoggingOrderNotifier().notify_order_placed(make_notification()) is True

    assert "1234abcd" in caplog.text


def test_notifier_selection(email_settings, monkeypatch):
    assert isinstance(get_order_notifier(), EmailOrderNotifier)

    monkeypatch.setattr(email_settings, "ORDER_NOTIFICATION_EMAIL", None)
    assert isinstance(get_order_notifier(), LoggingOrderNotifier)

    monkeypatch.setattr(email_settings, "ORDER_NOTIFICATION_EMAIL", "owner@styleco.test")
    monkeypatch.setattr(email_settings, "EMAIL_API_KEY", "")
    assert isinstance(get_order_notifier(), LoggingOrderNotifier)


# ---- HTML ----


def test_order_email_contains_order_details():
    html = render_order_email_html(
        make_notification(),
        generated_at=datetime(2026, 3, 1, 15, 0, tzinfo=timezone.utc),
    )

    assert "#1234abcd" in html
    assert "651.27 EGP" in html
    assert "Cash on Delivery" in html
    assert "Size: <strong>M</strong>" in html
    assert "400.00 EGP" in html
    assert "Delivery Fee: 30.00 EGP" in html
    assert "2 items" in html
    assert "Generated 2026-03-01 15:00 UTC" in html
    assert "Alternative Phone" not in html
    assert "Postal Code" not in html


def test_order_email_escapes_buyer_input():
    address = ShippingAddress(
        full_name="Mona",
        phone="01012345678",
        alternative_phone="01198765432",
        address="<script>alert(1)</script>",
        city="Cairo & Giza",
        governorate="Cairo",
        zip_code="11511",
        country="Egypt",
    )
    html = render_order_email_html(
        make_notification(customer_name="<b>Mona</b>", shipping_address=address)
    )

    assert "<script>" not in html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
    assert "&lt;b&gt;Mona&lt;/b&gt;" in html
    assert "Cairo &amp; Giza" in html
    assert "Alternative Phone" in html
    assert "Postal Code: 11511" in html
    assert "Delivery Fee" not in html
