# app/core/cart_session.py
import uuid
from pathlib import Path

from fastapi import Request, Response

from app.core.config import get_settings
from app.core.local_storage import FileStorage
from app.services.cart_store import CartStore

# 30 days
CART_COOKIE_MAX_AGE = 60 * 60 * 24 * 30


def _resolve_cart_id(raw: str | None) -> str:
    """
    Reuse the buyer's cart id if it is a well-formed UUID, otherwise issue
    a new one. Only canonical hex ids ever reach the filesystem.
    """
    if raw:
        try:
            return uuid.UUID(raw).hex
        except ValueError:
            pass
    return uuid.uuid4().hex


def get_cart_store(request: Request, response: Response) -> CartStore:
    """
    FastAPI dependency returning the CartStore for the calling buyer.

    The cart id travels in a cookie (CART_COOKIE_NAME) and is refreshed on
    every request. Guests and signed-in buyers are handled the same way.
    """
    settings = get_settings()
    cart_id = _resolve_cart_id(request.cookies.get(settings.CART_COOKIE_NAME))

    response.set_cookie(
        key=settings.CART_COOKIE_NAME,
        value=cart_id,
        max_age=CART_COOKIE_MAX_AGE,
        httponly=True,
        samesite="lax",
    )

    storage = FileStorage(Path(settings.CART_STORAGE_DIR) / cart_id)
    return CartStore(storage)
