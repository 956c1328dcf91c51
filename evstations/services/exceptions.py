"""Domain exceptions raised by the service layer.

Each exception carries the HTTP status it is rendered with; the translation
to a response happens in the exception handlers registered in ``main.py``.
"""

from fastapi import status


class ServiceError(Exception):
    """Base exception for service-layer failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Server error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(ServiceError):
    """Input failed a domain rule the request schema could not express."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input"

    def __init__(self, detail: str | None = None, field: str | None = None):
        self.field = field
        super().__init__(detail)

    @property
    def errors(self) -> list[dict[str, str | None]]:
        return [{"field": self.field, "msg": self.detail}]


class UnauthorizedError(ServiceError):
    """Missing or bad credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Invalid authentication credentials"


class InvalidTokenError(UnauthorizedError):
    """Access token is malformed, has a bad signature, or has expired."""

    default_detail = "Token is not valid"


class ForbiddenError(ServiceError):
    """Authenticated, but not allowed to touch the resource."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "User not authorized"


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class ConflictError(ServiceError):
    """Unique constraint violated (duplicate email)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "User already exists"


class InvalidOrExpiredTokenError(ServiceError):
    """Password reset token is unknown or past its expiry."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid or expired token"


class EmailDeliveryError(ServiceError):
    default_detail = "Email could not be sent"
