from sqlalchemy import JSON, Column, DateTime, Integer, String

from app.clock import utcnow
from app.database import Base


class UserSession(Base):
    """Server-side login session.

    ``user_id`` is not a foreign key: a session may outlive its
    user, and the session guard re-checks the users table on every read.
    """

    __tablename__ = "sessions"

    id = Column(String(64), primary_key=True)
    user_id = Column(Integer, nullable=False, index=True)
    data = Column(JSON, nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
