"""Signed, time-limited access tokens."""

from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt

from evstations.config import Settings, get_settings
from evstations.services.exceptions import InvalidTokenError


class TokenService:
    """Issue and verify JWT access tokens.

    Validity is signature plus expiry only; there is no revocation list.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", ttl: timedelta | None = None):
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = ttl if ttl is not None else timedelta(days=7)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "TokenService":
        settings = settings or get_settings()
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            ttl=timedelta(minutes=settings.jwt_expiration_minutes),
        )

    def issue(self, user_id: int) -> str:
        """Create a token for the given user id."""
        expire = datetime.now(UTC) + self.ttl
        to_encode = {
            "sub": str(user_id),
            "exp": expire,
        }
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        """Return the user id embedded in a valid token."""
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise InvalidTokenError("Token has expired") from None
        except JWTError:
            raise InvalidTokenError() from None

        subject = payload.get("sub")
        try:
            return int(subject)
        except (TypeError, ValueError):
            raise InvalidTokenError() from None
