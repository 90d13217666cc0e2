# app/core/email_client.py
"""
Email client utilities for the storefront backend.

Responsibilities:
  - Read the transactional email API configuration from settings.
  - Provide a single send_email(...) function for services to use.

The API is Resend-compatible: POST JSON {from, to[], subject, html} with
a bearer token, answered by {"id": "..."} on success.

Typical .env configuration:

    EMAIL_API_URL=https://api.resend.com/emails
    EMAIL_API_KEY=re_xxxxxxxxxxxxxxxx
    EMAIL_FROM=StyleCo <onboarding@resend.dev>
    ORDER_NOTIFICATION_EMAIL=owner@example.com
"""

import logging

import httpx

from app.core.config import get_settings

logger = logging.getLogger(__name__)


class EmailSendError(Exception):
    """The email API answered, but did not accept the message."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: dict | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.response_body = response_body or {}
        super().__init__(message)


def is_email_configured() -> bool:
    return bool(get_settings().EMAIL_API_KEY)


def _error_message(status_code: int, body: dict) -> str:
    if body.get("message"):
        return str(body["message"])
    if body.get("error"):
        return str(body["error"])
    if status_code == 401:
        return "Invalid API key"
    if status_code == 422:
        return "Invalid email format or missing required fields"
    return "Unknown error"


def send_email(
    to: str | list[str],
    subject: str,
    html: str,
    from_email: str | None = None,
    client: httpx.Client | None = None,
) -> str:
    """
    Send an HTML email through the transactional email API.

    Parameters
    ----------
    to:
        Recipient address or list of addresses.
    subject:
        Email subject line.
    html:
        Full HTML document.
    from_email:
        Sender header; defaults to EMAIL_FROM.
    client:
        Optional httpx.Client to reuse (tests pass one with a mock
        transport). A short-lived client is created otherwise.

    Returns
    -------
    The message id assigned by the API.

    Raises
    ------
    RuntimeError:
        If EMAIL_API_KEY is not configured.
    EmailSendError:
        On a non-2xx response or a response without an id.
    httpx.HTTPError:
        On network failures / timeouts.
    """
    settings = get_settings()
    if not settings.EMAIL_API_KEY:
        raise RuntimeError(
            "Email API is not configured. Please set EMAIL_API_KEY in .env."
        )

    payload = {
        "from": from_email or settings.EMAIL_FROM,
        "to": [to] if isinstance(to, str) else list(to),
        "subject": subject,
        "html": html,
    }
    headers = {"Authorization": f"Bearer {settings.EMAIL_API_KEY}"}

    logger.info(
        "Sending email to %s (subject=%r, html=%d chars)",
        payload["to"],
        subject,
        len(html),
    )

    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=settings.EMAIL_TIMEOUT_SECONDS)
    try:
        response = client.post(settings.EMAIL_API_URL, json=payload, headers=headers)
    finally:
        if owns_client:
            client.close()

    try:
        body = response.json()
    except ValueError:
        body = {"raw": response.text}
    if not isinstance(body, dict):
        body = {"raw": body}

    if response.is_success and body.get("id"):
        return str(body["id"])

    raise EmailSendError(
        _error_message(response.status_code, body),
        status_code=response.status_code,
        response_body=body,
    )
