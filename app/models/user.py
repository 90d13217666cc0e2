# app/models/user.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Persistent user profile for the storefront.

    Identity:
      - id: MUST match Supabase auth.users.id (UUID from JWT "sub")

    This table is *not* responsible for password hashes. Supabase Auth
    stores the password in its own schema. We only mirror identity,
    display details and the admin flag.
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(
        primary_key=True,
        index=True,
        description="Matches Supabase auth.users.id",
    )

    email: str = Field(
        unique=True,
        index=True,
        description="Email from Supabase auth.users",
    )

    full_name: str | None = Field(
        default=None,
        max_length=200,
    )

    avatar_url: str | None = None

    is_admin: bool = Field(
        default=False,
        index=True,
        description="Grants access to the admin console",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last update timestamp (UTC)",
    )
