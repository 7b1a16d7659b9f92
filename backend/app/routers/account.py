import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user, get_session_id
from app.models import User
from app.routers.auth import clear_session
from app.schemas import MessageResponse, ProfileUpdate, TokenRequest, UserResponse
from app.services import accounts
from app.services.sessions import load_session

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/profile", response_model=UserResponse)
def get_profile(user: User = Depends(get_current_user)):
    """Get the full profile of the logged-in user."""
    return user


@router.patch("/profile", response_model=MessageResponse)
def update_profile(
    data: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update profile fields and, when both passwords are given, the password."""
    password_changed = accounts.update_profile(db, user, data)
    if password_changed:
        return MessageResponse(message="Profile and password updated")
    return MessageResponse(message="Profile updated")


@router.post("/delete-request", response_model=MessageResponse)
def request_account_deletion(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Email a confirmation link that permanently deletes the account."""
    email_sent = accounts.request_account_deletion(db, user)
    if not email_sent:
        return MessageResponse(
            message="We couldn't send the confirmation email. Please try again later."
        )
    return MessageResponse(message="Check your email to confirm account deletion.")


@router.post("/delete-confirm", response_model=MessageResponse)
def confirm_account_deletion(
    data: TokenRequest,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
):
    """Delete the account, its applications and interviews.

    The caller is logged out only when their session belongs to the deleted
    account. Other users opening the link keep their session.
    """
    deleted_user_id = accounts.confirm_account_deletion(db, data.token)
    user_session = load_session(db, get_session_id(request))
    if user_session is not None and user_session.user_id == deleted_user_id:
        clear_session(request, response, db)
    return MessageResponse(message="Your account has been deleted.")
