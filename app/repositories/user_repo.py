# app/repositories/user_repo.py
import uuid

from sqlmodel import Session

from app.models.user import User


class UserRepository:
    """
    Buyer profiles. Rows are keyed by the Supabase auth user id.
    """

    def get_by_id(self, session: Session, user_id: uuid.UUID) -> User | None:
        return session.get(User, user_id)

    def create(self, session: Session, user: User) -> User:
        """Insert a freshly provisioned profile."""
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def update(self, session: Session, user: User) -> User:
        session.add(user)
        session.commit()
        session.refresh(user)
        return user
