"""Authentication API endpoints.

Handlers that hash passwords are plain ``def`` so they run in the thread
pool instead of blocking the event loop.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from evstations.api.dependencies import get_auth_service, get_current_user
from evstations.models.user import User
from evstations.schemas.auth import (
    ForgotPasswordRequest,
    MessageResponse,
    ResetPasswordRequest,
    TokenResponse,
    UpdatePasswordRequest,
    UserLogin,
    UserRegister,
    UserResponse,
    UserUpdate,
)
from evstations.services.auth import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Register a new user."""
    _, token = auth_service.register(user_data.name, user_data.email, user_data.password)
    return TokenResponse(token=token)


@router.post("/login", response_model=TokenResponse)
def login(
    credentials: UserLogin,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Login with email and password."""
    _, token = auth_service.login(credentials.email, credentials.password)
    return TokenResponse(token=token)


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user


@router.put("/update", response_model=UserResponse)
def update_me(
    user_data: UserUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Update name and/or email of the current user."""
    return auth_service.update_user(current_user, name=user_data.name, email=user_data.email)


@router.delete("/delete", response_model=MessageResponse)
def delete_me(
    current_user: Annotated[User, Depends(get_current_user)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Delete the current user's account and the stations they created."""
    auth_service.delete_account(current_user)
    return MessageResponse(msg="User deleted")


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(
    request_data: ForgotPasswordRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Email a password reset link."""
    auth_service.forgot_password(request_data.email)
    return MessageResponse(msg="Email sent")


@router.put("/reset-password/{resettoken}", response_model=TokenResponse)
def reset_password(
    resettoken: str,
    request_data: ResetPasswordRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Set a new password using the emailed reset token."""
    _, token = auth_service.reset_password(resettoken, request_data.password)
    return TokenResponse(token=token)


@router.put("/update-password", response_model=TokenResponse)
def update_password(
    request_data: UpdatePasswordRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Change the password of the current user."""
    token = auth_service.update_password(
        current_user, request_data.current_password, request_data.new_password
    )
    return TokenResponse(token=token)
