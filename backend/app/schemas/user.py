from datetime import datetime

from pydantic import BaseModel, EmailStr, field_validator


def normalize_email(v):
    """Strip and lowercase an incoming email so every lookup matches the stored form."""
    if isinstance(v, str):
        return v.strip().lower()
    return v


class UserBase(BaseModel):
    first_name: str
    last_name: str
    gender: str | None = None


class SignupRequest(UserBase):
    email: EmailStr
    # Strength policy is checked in app.services.accounts.signup
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def validate_email(cls, v):
        return normalize_email(v)


class ProfileUpdate(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    gender: str | None = None
    auto_ghost: bool | None = None
    current_password: str | None = None
    new_password: str | None = None


class SessionUser(UserBase):
    """The identity snapshot kept in a login session."""
    id: int


class UserResponse(UserBase):
    id: int
    email: EmailStr
    is_verified: bool
    auto_ghost: bool
    created_at: datetime

    class Config:
        from_attributes = True
