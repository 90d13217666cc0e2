# app/core/auth.py
"""
Buyer identity from Supabase Auth access tokens.

Tokens are verified locally with the project's JWT secret; no call to the
auth server is made. A request without a bearer header is a guest: it can
browse, keep a cart and check out, but has no order history.
"""

import uuid
from dataclasses import dataclass
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlmodel import Session

from app.core.config import get_settings
from app.database import get_session
from app.models.user import User
from app.repositories.user_repo import UserRepository

settings = get_settings()

# auto_error=False: a missing header yields None instead of a 403
bearer_scheme = HTTPBearer(auto_error=False)

user_repo = UserRepository()


@dataclass(frozen=True)
class TokenIdentity:
    user_id: uuid.UUID
    email: str
    full_name: str | None = None


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify signature and expiry of a Supabase access token.

    The audience claim is not checked; Supabase sets it per project.
    """
    try:
        return jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.SUPABASE_JWT_ALG],
            options={"verify_aud": False},
        )
    except JWTError:
        raise _unauthorized("Invalid or expired token")


def identity_from_claims(claims: dict[str, Any]) -> TokenIdentity:
    sub = claims.get("sub")
    email = claims.get("email")
    if not sub or not email:
        raise _unauthorized("Token missing sub/email")

    try:
        user_id = uuid.UUID(str(sub))
    except ValueError:
        raise _unauthorized("Invalid sub in token")

    # Sign-up stores the buyer's name in user_metadata
    metadata = claims.get("user_metadata") or {}
    return TokenIdentity(user_id, email, metadata.get("full_name"))


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> User | None:
    """
    Profile of the signed-in buyer, or None for a guest.

    The first request carrying a valid token creates the profile row
    (never as admin).
    """
    if credentials is None:
        return None

    identity = identity_from_claims(decode_access_token(credentials.credentials))

    user = user_repo.get_by_id(session, identity.user_id)
    if user is None:
        user = user_repo.create(
            session,
            User(
                id=identity.user_id,
                email=identity.email,
                full_name=identity.full_name,
                is_admin=False,
            ),
        )
    return user


def require_auth(user: User | None = Depends(get_current_user)) -> User:
    """Reject guests with 401."""
    if user is None:
        raise _unauthorized("Authentication required")
    return user
