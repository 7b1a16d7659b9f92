from pydantic import BaseModel, EmailStr, field_validator

from app.schemas.user import SessionUser, normalize_email


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None

    @field_validator("email", mode="before")
    @classmethod
    def validate_email(cls, v):
        return normalize_email(v)


class LoginResponse(BaseModel):
    message: str
    user: SessionUser


class MeResponse(BaseModel):
    logged_in: bool
    user: SessionUser | None = None


class ResendVerificationRequest(BaseModel):
    user_id: int
    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def validate_email(cls, v):
        return normalize_email(v)


class ForgotPasswordRequest(BaseModel):
    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def validate_email(cls, v):
        return normalize_email(v)


class ResetPasswordRequest(BaseModel):
    token: str
    new_password: str


class TokenRequest(BaseModel):
    token: str


class MessageResponse(BaseModel):
    message: str
