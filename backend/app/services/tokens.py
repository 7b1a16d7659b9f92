"""Single-use action tokens (verify email, reset password, delete account).

Tokens are only ever looked up together with their kind and an expiry
check, so an expired token is rejected even if the purge sweep has not
removed it yet. Callers delete the returned row in the same commit as the
state change it authorises.
"""

import logging
from datetime import timedelta

from sqlalchemy.orm import Session

from app.clock import utcnow
from app.errors import InvalidOrExpiredToken
from app.models import ActionToken, TokenKind
from app.services.auth import generate_token, hash_token

logger = logging.getLogger(__name__)


def issue_token(db: Session, user_id: int, kind: TokenKind, ttl: timedelta) -> str:
    """Create a token row and return the raw token. Does not commit."""
    token = generate_token()
    db.add(
        ActionToken(
            user_id=user_id,
            kind=kind.value,
            token_hash=hash_token(token),
            expires_at=utcnow() + ttl,
        )
    )
    return token


def find_valid_token(db: Session, token: str | None, kind: TokenKind) -> ActionToken:
    """Return the live token row matching ``token`` and ``kind``.

    Unknown, expired, already used and wrong-kind tokens all raise the same
    InvalidOrExpiredToken.
    """
    if not token:
        raise InvalidOrExpiredToken()
    record = (
        db.query(ActionToken)
        .filter(
            ActionToken.token_hash == hash_token(token),
            ActionToken.kind == kind.value,
            ActionToken.expires_at > utcnow(),
        )
        .first()
    )
    if not record:
        raise InvalidOrExpiredToken()
    return record


def delete_user_tokens(db: Session, user_id: int, kind: TokenKind | None = None) -> int:
    """Delete a user's tokens, optionally only those of one kind. Does not commit."""
    query = db.query(ActionToken).filter(ActionToken.user_id == user_id)
    if kind is not None:
        query = query.filter(ActionToken.kind == kind.value)
    return query.delete(synchronize_session=False)


def purge_expired_tokens(db: Session) -> int:
    """Delete every expired token and commit. Returns the number removed."""
    count = (
        db.query(ActionToken)
        .filter(ActionToken.expires_at <= utcnow())
        .delete(synchronize_session=False)
    )
    db.commit()
    logger.info(f"Purged {count} expired action tokens")
    return count
