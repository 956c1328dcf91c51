"""Authentication schemas."""

from datetime import datetime

from pydantic import EmailStr, Field

from evstations.schemas.base import RequestModel, ResponseModel


class UserRegister(RequestModel):
    """User registration request."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=6, max_length=128)


class UserLogin(RequestModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class UserUpdate(RequestModel):
    """Profile update; omitted fields are left unchanged."""

    name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = Field(None, max_length=255)


class ForgotPasswordRequest(RequestModel):
    email: EmailStr = Field(..., max_length=255)


class ResetPasswordRequest(RequestModel):
    password: str = Field(..., min_length=6, max_length=128)


class UpdatePasswordRequest(RequestModel):
    """Password change for a logged-in user."""

    current_password: str = Field(..., min_length=1, max_length=128)
    new_password: str = Field(..., min_length=6, max_length=128)


class TokenResponse(ResponseModel):
    """JWT token response."""

    token: str


class MessageResponse(ResponseModel):
    msg: str


class UserResponse(ResponseModel):
    """User profile; never includes the password hash."""

    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime
