"""Account lifecycle: signup, email verification, login, password recovery,
profile changes and confirmed account deletion.

Every emailed step is backed by a single-use action token. Each operation
runs as ordered stages: validate, write and commit, then send mail. Mail
failures are logged and reported to the caller but never roll back a commit,
so the user can always ask for the link again.
"""

import logging
from datetime import timedelta

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.errors import (
    Conflict,
    Forbidden,
    InvalidOrExpiredToken,
    NotFound,
    ServerError,
    Unauthorized,
    ValidationError,
    VerificationRequired,
)
from app.models import ActionToken, Interview, JobApplication, TokenKind, User
from app.schemas import ProfileUpdate, SignupRequest
from app.services import tokens
from app.services.auth import dummy_verify, hash_password, validate_password_strength, verify_password
from app.services.email import (
    send_account_deletion_email,
    send_password_reset_email,
    send_verification_email,
)

settings = get_settings()
logger = logging.getLogger(__name__)

WRONG_CREDENTIALS = "Wrong credentials!"

# Rows owned by a user, deleted in foreign key order before the users row.
ACCOUNT_DELETE_ORDER = (Interview, JobApplication, ActionToken)


def _commit(db: Session, action: str) -> None:
    """Commit or roll back, turning store failures into ServerError."""
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Failed to {action}")
        raise ServerError("Unable to complete the request. Please try again later.")


def _issue_token(db: Session, user: User, kind: TokenKind, ttl_hours: int) -> str:
    token = tokens.issue_token(db, user.id, kind, timedelta(hours=ttl_hours))
    _commit(db, f"issue {kind.value} token for user {user.id}")
    return token


def _token_owner(db: Session, record: ActionToken) -> User:
    user = db.query(User).filter(User.id == record.user_id).first()
    if not user:
        raise InvalidOrExpiredToken()
    return user


def signup(db: Session, data: SignupRequest) -> bool:
    """Create an unverified account and email a verification link.

    Returns whether the verification email went out.
    """
    validate_password_strength(data.password, signup=True)

    if db.query(User).filter(User.email == data.email).first():
        raise Conflict("Account with this email already exists!")

    user = User(
        first_name=data.first_name,
        last_name=data.last_name,
        gender=data.gender,
        email=data.email,
        password_hash=hash_password(data.password),
        is_verified=False,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("Account with this email already exists!")
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Failed to create user account for {data.email}")
        raise ServerError("Unable to create account. Please try again later.")
    db.refresh(user)

    token = _issue_token(db, user, TokenKind.VERIFY_EMAIL, settings.verify_email_token_ttl_hours)

    email_sent = send_verification_email(user.email, user.first_name, token)
    if not email_sent:
        logger.warning(f"Failed to send verification email to {user.email} - user can request resend")
    return email_sent


def verify_email(db: Session, token: str) -> User:
    """Mark the token's owner verified and burn the token."""
    record = tokens.find_valid_token(db, token, TokenKind.VERIFY_EMAIL)
    user = _token_owner(db, record)

    user.is_verified = True
    db.delete(record)
    _commit(db, f"verify user {user.id}")
    logger.info(f"User {user.id} verified their email")
    return user


def authenticate(db: Session, email: str | None, password: str | None) -> User:
    """Check credentials for login.

    Unknown email and wrong password give the same Unauthorized error. A
    correct password on an unverified account raises VerificationRequired
    instead of letting a session be established.
    """
    if not email or not password:
        raise ValidationError("Email and password are required")

    user = db.query(User).filter(User.email == email).first()
    if not user:
        dummy_verify()
        raise Unauthorized(WRONG_CREDENTIALS)
    if not verify_password(password, user.password_hash):
        raise Unauthorized(WRONG_CREDENTIALS)

    if not user.is_verified:
        raise VerificationRequired(user_id=user.id, email=user.email)

    return user


def resend_verification(db: Session, user_id: int, email: str) -> bool:
    user = db.query(User).filter(User.id == user_id, User.email == email).first()
    if not user:
        raise NotFound("User not found")
    if user.is_verified:
        raise ValidationError("Account is already verified")

    token = _issue_token(db, user, TokenKind.VERIFY_EMAIL, settings.verify_email_token_ttl_hours)

    email_sent = send_verification_email(user.email, user.first_name, token)
    if not email_sent:
        logger.warning(f"Failed to resend verification email to {user.email}")
    return email_sent


def forgot_password(db: Session, email: str) -> bool:
    """Email a password reset link.

    Unknown addresses get NotFound, which does reveal whether an account
    exists for the address.
    """
    user = db.query(User).filter(User.email == email).first()
    if not user:
        raise NotFound("No account found with this email")

    token = _issue_token(db, user, TokenKind.RESET_PASSWORD, settings.reset_password_token_ttl_hours)

    email_sent = send_password_reset_email(user.email, user.first_name, token)
    if not email_sent:
        logger.warning(f"Failed to send password reset email to {user.email}")
    return email_sent


def reset_password(db: Session, token: str, new_password: str) -> User:
    validate_password_strength(new_password)

    record = tokens.find_valid_token(db, token, TokenKind.RESET_PASSWORD)
    user = _token_owner(db, record)

    user.password_hash = hash_password(new_password)
    db.delete(record)
    _commit(db, f"reset password for user {user.id}")
    logger.info(f"User {user.id} reset their password")
    return user


def update_profile(db: Session, user: User, data: ProfileUpdate) -> bool:
    """Update profile fields, then optionally change the password.

    The two writes are committed separately: a rejected password change
    leaves the already saved profile fields in place and raises.
    Returns whether the password was changed.
    """
    change_password = bool(data.current_password or data.new_password)
    if change_password:
        if not (data.current_password and data.new_password):
            raise ValidationError("Both current and new password are required to change password")
        validate_password_strength(data.new_password)

    for field in ("first_name", "last_name", "gender", "auto_ghost"):
        value = getattr(data, field)
        if value is not None:
            setattr(user, field, value)
    _commit(db, f"update profile for user {user.id}")

    if not change_password:
        return False

    if not verify_password(data.current_password, user.password_hash):
        raise Forbidden("Current password is incorrect")

    user.password_hash = hash_password(data.new_password)
    _commit(db, f"change password for user {user.id}")
    logger.info(f"User {user.id} changed their password")
    return True


def request_account_deletion(db: Session, user: User) -> bool:
    """Replace any pending deletion token with a new one and email it."""
    tokens.delete_user_tokens(db, user.id, TokenKind.DELETE_ACCOUNT)
    token = _issue_token(db, user, TokenKind.DELETE_ACCOUNT, settings.delete_account_token_ttl_hours)

    email_sent = send_account_deletion_email(user.email, user.first_name, token)
    if not email_sent:
        logger.warning(f"Failed to send account deletion email to {user.email}")
    return email_sent


def _delete_user_rows(db: Session, model, user_id: int) -> int:
    return db.query(model).filter(model.user_id == user_id).delete(synchronize_session=False)


def confirm_account_deletion(db: Session, token: str) -> int:
    """Delete the token owner's data and account in one transaction.

    Interviews, applications and action tokens go first, then the user row
    and finally the confirmation token itself. Any failure rolls everything
    back. Returns the deleted user's id.
    """
    record = tokens.find_valid_token(db, token, TokenKind.DELETE_ACCOUNT)
    user_id = record.user_id
    token_id = record.id

    try:
        for model in ACCOUNT_DELETE_ORDER:
            deleted = _delete_user_rows(db, model, user_id)
            logger.debug(f"Deleting user {user_id}: removed {deleted} {model.__tablename__} rows")
        db.query(User).filter(User.id == user_id).delete(synchronize_session=False)
        db.query(ActionToken).filter(ActionToken.id == token_id).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Account deletion failed for user {user_id}, rolled back")
        raise ServerError("Unable to delete account. Please try again later.")

    logger.info(f"Deleted account {user_id}")
    return user_id
