import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import get_db
from app.dependencies import get_optional_current_user, get_session_id
from app.models import User
from app.schemas import (
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    MeResponse,
    MessageResponse,
    ResendVerificationRequest,
    ResetPasswordRequest,
    SessionUser,
    SignupRequest,
)
from app.services import accounts, create_session_cookie
from app.services.sessions import destroy_session, establish_session

logger = logging.getLogger(__name__)
router = APIRouter()
settings = get_settings()


def set_session_cookie(response: Response, session_id: str) -> None:
    # Secure only in production (HTTPS)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=create_session_cookie(session_id),
        httponly=True,
        secure=settings.environment == "production",
        samesite="lax",
        max_age=60 * 60 * settings.session_ttl_hours,
    )


def clear_session(request: Request, response: Response, db: Session) -> None:
    destroy_session(db, get_session_id(request))
    response.delete_cookie(key=settings.session_cookie_name)


@router.post("/signup", response_model=MessageResponse)
def signup(data: SignupRequest, db: Session = Depends(get_db)):
    """Create an account and send the verification email."""
    email_sent = accounts.signup(db, data)
    if not email_sent:
        return MessageResponse(
            message="Account was successfully created, but we couldn't send the verification email. "
                    "Please request a new verification link."
        )
    return MessageResponse(
        message="Account was successfully created! Please check your email to verify your account."
    )


@router.get("/verify-email/{token}", response_model=MessageResponse)
def verify_email(token: str, db: Session = Depends(get_db)):
    """Verify email address using the token sent via email."""
    accounts.verify_email(db, token)
    return MessageResponse(message="Email verified successfully. You can now log in.")


@router.post("/login", response_model=LoginResponse)
def login(data: LoginRequest, response: Response, db: Session = Depends(get_db)):
    """Log in a verified user and start a server-side session."""
    user = accounts.authenticate(db, data.email, data.password)
    session_id = establish_session(db, user)
    set_session_cookie(response, session_id)
    return LoginResponse(message="Logged in successfully", user=SessionUser(**user.snapshot()))


@router.post("/logout", response_model=MessageResponse)
def logout(request: Request, response: Response, db: Session = Depends(get_db)):
    """Destroy the session, whether or not there was one."""
    clear_session(request, response, db)
    return MessageResponse(message="Successfully logged out")


@router.post("/resend-verification", response_model=MessageResponse)
def resend_verification(data: ResendVerificationRequest, db: Session = Depends(get_db)):
    """Send a fresh verification link to an unverified account."""
    email_sent = accounts.resend_verification(db, data.user_id, data.email)
    if not email_sent:
        return MessageResponse(message="We couldn't send the verification email. Please try again later.")
    return MessageResponse(message="A new verification link has been sent to your email.")


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(data: ForgotPasswordRequest, db: Session = Depends(get_db)):
    email_sent = accounts.forgot_password(db, data.email)
    if not email_sent:
        return MessageResponse(message="We couldn't send the password reset email. Please try again later.")
    return MessageResponse(message="A password reset link has been sent to your email.")


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(data: ResetPasswordRequest, db: Session = Depends(get_db)):
    accounts.reset_password(db, data.token, data.new_password)
    return MessageResponse(message="Password has been reset. You can now log in.")


@router.get("/me", response_model=MeResponse)
def me(
    request: Request,
    response: Response,
    user: User | None = Depends(get_optional_current_user),
):
    """Report who is logged in. A session whose user is gone reads as logged out."""
    if user is None:
        if request.cookies.get(settings.session_cookie_name):
            response.delete_cookie(key=settings.session_cookie_name)
        return MeResponse(logged_in=False)
    return MeResponse(logged_in=True, user=SessionUser(**user.snapshot()))
