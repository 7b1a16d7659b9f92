import enum

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String

from app.clock import utcnow
from app.database import Base


class TokenKind(str, enum.Enum):
    VERIFY_EMAIL = "verify_email"
    RESET_PASSWORD = "reset_password"
    DELETE_ACCOUNT = "delete_account"


class ActionToken(Base):
    """Single-use, expiring token backing an emailed account action.

    Only the SHA-256 of the token is stored; the raw value exists in the
    emailed link alone.
    """

    __tablename__ = "action_tokens"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    kind = Column(String(32), nullable=False)
    token_hash = Column(String(64), unique=True, index=True, nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        Index("ix_action_tokens_user_kind", "user_id", "kind"),
    )
