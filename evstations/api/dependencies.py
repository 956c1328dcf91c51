"""FastAPI dependencies for authentication, database and services."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader, HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from evstations.database import get_db
from evstations.models.user import User
from evstations.services.auth import AuthService
from evstations.services.email_service import EmailService
from evstations.services.exceptions import UnauthorizedError
from evstations.services.station_service import StationService
from evstations.services.tokens import TokenService

bearer_scheme = HTTPBearer(auto_error=False)
# Header used by older clients, which also send the bare token in Authorization
auth_token_header = APIKeyHeader(name="x-auth-token", auto_error=False)


def get_token_service() -> TokenService:
    """Get token service configured from settings."""
    return TokenService.from_settings()


def get_email_service() -> EmailService:
    """Get email service instance."""
    return EmailService()


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    mailer: Annotated[EmailService, Depends(get_email_service)],
) -> AuthService:
    """Get auth service with dependencies."""
    return AuthService(db, tokens, mailer)


def get_station_service(
    db: Annotated[Session, Depends(get_db)],
) -> StationService:
    """Get station service with dependencies."""
    return StationService(db)


def get_access_token(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    header_token: Annotated[str | None, Depends(auth_token_header)],
) -> str:
    """Extract the access token from the request headers."""
    if credentials is not None:
        return credentials.credentials
    if header_token:
        return header_token

    raw = (request.headers.get("Authorization") or "").strip()
    if raw and " " not in raw:
        return raw

    raise UnauthorizedError("No token, authorization denied")


def get_current_user(
    token: Annotated[str, Depends(get_access_token)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> User:
    """Get the current authenticated user from the access token."""
    return auth_service.get_current_user(token)
