"""Server-side session store keyed by an opaque session id."""

import logging
from datetime import timedelta

from sqlalchemy.orm import Session

from app.clock import utcnow
from app.config import get_settings
from app.models import User, UserSession
from app.services.auth import generate_token

settings = get_settings()
logger = logging.getLogger(__name__)


def establish_session(db: Session, user: User) -> str:
    """Persist a session for ``user`` and return its id."""
    session_id = generate_token()
    db.add(
        UserSession(
            id=session_id,
            user_id=user.id,
            data=user.snapshot(),
            expires_at=utcnow() + timedelta(hours=settings.session_ttl_hours),
        )
    )
    db.commit()
    return session_id


def load_session(db: Session, session_id: str | None) -> UserSession | None:
    """Return the unexpired session with this id, if any."""
    if not session_id:
        return None
    return (
        db.query(UserSession)
        .filter(UserSession.id == session_id, UserSession.expires_at > utcnow())
        .first()
    )


def destroy_session(db: Session, session_id: str | None) -> None:
    """Delete the session row. A missing session is not an error."""
    if not session_id:
        return
    db.query(UserSession).filter(UserSession.id == session_id).delete(synchronize_session=False)
    db.commit()


def purge_expired_sessions(db: Session) -> int:
    count = (
        db.query(UserSession)
        .filter(UserSession.expires_at <= utcnow())
        .delete(synchronize_session=False)
    )
    db.commit()
    logger.info(f"Purged {count} expired sessions")
    return count
