from app.services.auth import (
    hash_password,
    verify_password,
    validate_password_strength,
    create_session_cookie,
    decode_session_cookie,
    generate_token,
)
from app.services.email import (
    send_verification_email,
    send_password_reset_email,
    send_account_deletion_email,
    send_interview_reminder_email,
)

__all__ = [
    "hash_password",
    "verify_password",
    "validate_password_strength",
    "create_session_cookie",
    "decode_session_cookie",
    "generate_token",
    "send_verification_email",
    "send_password_reset_email",
    "send_account_deletion_email",
    "send_interview_reminder_email",
]
