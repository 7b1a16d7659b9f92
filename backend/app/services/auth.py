import hashlib
import re
import secrets
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import get_settings
from app.errors import ValidationError

settings = get_settings()

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

MIN_PASSWORD_LENGTH = 8

_UPPERCASE = re.compile(r"[A-Z]")
_SPECIAL = re.compile(r"[^A-Za-z0-9\s]")


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def dummy_verify() -> None:
    """Spend the time of a real verify when there is no hash to check."""
    pwd_context.dummy_verify()


def validate_password_strength(password: str | None, *, signup: bool = False) -> None:
    """Raise ValidationError unless the password meets the strength policy.

    At least 8 characters, one uppercase letter and one character that is
    neither alphanumeric nor whitespace. On signup the password may not
    start or end with whitespace either.
    """
    if not password:
        raise ValidationError("Password is required")
    if signup and password != password.strip():
        raise ValidationError("Password must not start or end with whitespace")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    if not _UPPERCASE.search(password):
        raise ValidationError("Password must contain at least one uppercase letter")
    if not _SPECIAL.search(password):
        raise ValidationError("Password must contain at least one special character")


def generate_token() -> str:
    """Generate a secure random token for emailed links and session ids."""
    return secrets.token_urlsafe(32)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def create_session_cookie(session_id: str, expires_delta: timedelta | None = None) -> str:
    """Wrap a server-side session id in a signed, expiring JWT."""
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.session_ttl_hours)
    expire = datetime.now(timezone.utc) + expires_delta
    return jwt.encode({"sid": session_id, "exp": expire}, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_session_cookie(cookie: str) -> str | None:
    """Return the session id from a cookie value, or None if invalid/expired."""
    try:
        payload = jwt.decode(cookie, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    session_id = payload.get("sid")
    return session_id if isinstance(session_id, str) else None
