from app.schemas.user import UserBase, SignupRequest, ProfileUpdate, SessionUser, UserResponse
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MeResponse,
    ResendVerificationRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    TokenRequest,
    MessageResponse,
)
from app.schemas.application import (
    ApplicationCreate,
    ApplicationResponse,
    ApplicationListResponse,
    InterviewCreate,
    InterviewResponse,
)

__all__ = [
    "UserBase",
    "SignupRequest",
    "ProfileUpdate",
    "SessionUser",
    "UserResponse",
    "LoginRequest",
    "LoginResponse",
    "MeResponse",
    "ResendVerificationRequest",
    "ForgotPasswordRequest",
    "ResetPasswordRequest",
    "TokenRequest",
    "MessageResponse",
    "ApplicationCreate",
    "ApplicationResponse",
    "ApplicationListResponse",
    "InterviewCreate",
    "InterviewResponse",
]
