"""Pydantic schemas for API requests and responses."""

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
from evstations.schemas.station import Location, StationCreate, StationResponse, StationUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserUpdate",
    "ForgotPasswordRequest",
    "ResetPasswordRequest",
    "UpdatePasswordRequest",
    "TokenResponse",
    "MessageResponse",
    "UserResponse",
    "Location",
    "StationCreate",
    "StationUpdate",
    "StationResponse",
]
