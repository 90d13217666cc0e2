# app/services/user_service.py
from datetime import datetime, timezone

from sqlmodel import Session

from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.user import UserUpdate


class UserService:
    """
    Business logic for the buyer's own profile.

    The profile row is auto-provisioned in `get_current_user`; email and
    is_admin are never changed from here.
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    def get_me(self, current_user: User) -> User:
        """Return the current authenticated user."""
        return current_user

    def update_me(
        self,
        session: Session,
        current_user: User,
        payload: UserUpdate,
    ) -> User:
        """
        Partial update for profile edits (full_name, avatar_url).
        """
        if payload.full_name is not None:
            current_user.full_name = payload.full_name
        if payload.avatar_url is not None:
            current_user.avatar_url = payload.avatar_url

        current_user.updated_at = datetime.now(timezone.utc)
        return self.repo.update(session, current_user)
