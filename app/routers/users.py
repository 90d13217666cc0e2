# app/routers/users.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import require_auth
from app.database import get_session
from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.user import UserRead, UserUpdate
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])

service = UserService(UserRepository())


@router.get("/me", response_model=UserRead)
def read_profile(buyer: User = Depends(require_auth)):
    """Profile page. The row exists after the first signed-in request."""
    return service.get_me(buyer)


@router.patch("/me", response_model=UserRead)
def edit_profile(
    payload: UserUpdate,
    session: Session = Depends(get_session),
    buyer: User = Depends(require_auth),
):
    """
    Change display name and/or avatar. Email comes from the auth
    provider and the admin flag is set by hand, so neither is accepted.
    """
    return service.update_me(session, buyer, payload)
