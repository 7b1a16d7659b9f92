import logging

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import get_db
from app.errors import Unauthorized
from app.models import User
from app.services.auth import decode_session_cookie
from app.services.sessions import destroy_session, load_session

settings = get_settings()
logger = logging.getLogger(__name__)


def get_session_id(request: Request) -> str | None:
    """Extract the server-side session id from the signed session cookie."""
    cookie = request.cookies.get(settings.session_cookie_name)
    if not cookie:
        return None
    return decode_session_cookie(cookie)


def get_optional_current_user(request: Request, db: Session = Depends(get_db)) -> User | None:
    """Get the current user if authenticated, None otherwise.

    The user row is re-read on every call. A session whose user no longer
    exists is destroyed and reported as logged out.
    """
    session_id = get_session_id(request)
    user_session = load_session(db, session_id)
    if not user_session:
        return None

    user = db.query(User).filter(User.id == user_session.user_id).first()
    if not user:
        logger.info(f"Destroying session for missing user {user_session.user_id}")
        destroy_session(db, session_id)
        return None

    return user


def get_current_user(user: User | None = Depends(get_optional_current_user)) -> User:
    """Get the current authenticated user. Raises 401 if not authenticated.

    Use this as a dependency for protected routes.
    """
    if user is None:
        raise Unauthorized("Not authenticated")
    return user
