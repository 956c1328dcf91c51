"""Authentication service for accounts, passwords and reset tokens."""

import hashlib
import logging
import secrets
from datetime import UTC, datetime, timedelta

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from evstations.config import get_settings
from evstations.models.user import User
from evstations.services.email_service import EmailService
from evstations.services.exceptions import (
    ConflictError,
    EmailDeliveryError,
    InvalidOrExpiredTokenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from evstations.services.tokens import TokenService

logger = logging.getLogger(__name__)

settings = get_settings()

MIN_PASSWORD_LENGTH = 6

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.bcrypt_rounds
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def _check_password(password: str | None, field: str = "password") -> None:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Please enter a password with {MIN_PASSWORD_LENGTH} or more characters",
            field=field,
        )


class AuthService:
    """Account lifecycle: registration, login, profile and password flows.

    Every operation is a single transition against the users table and
    commits before returning.
    """

    def __init__(
        self,
        db: Session,
        tokens: TokenService | None = None,
        mailer: EmailService | None = None,
    ):
        self.db = db
        self.tokens = tokens or TokenService.from_settings()
        self.mailer = mailer or EmailService()

    def get_user_by_email(self, email: str) -> User | None:
        """Get a user by email."""
        return self.db.query(User).filter(User.email == email.lower()).first()

    def register(self, name: str, email: str, password: str) -> tuple[User, str]:
        """Create an account and return it with a fresh access token."""
        if not name or not name.strip():
            raise ValidationError("Name is required", field="name")
        _check_password(password)

        email = email.lower()
        if self.get_user_by_email(email):
            raise ConflictError()

        user = User(name=name.strip(), email=email, password_hash=get_password_hash(password))
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            self.db.rollback()
            raise ConflictError() from None
        self.db.refresh(user)

        logger.info(f"Registered user {user.id}")
        return user, self.tokens.issue(user.id)

    def login(self, email: str, password: str) -> tuple[User, str]:
        """Authenticate by email and password."""
        user = self.get_user_by_email(email)
        if user is None:
            # Spend the same hashing effort as a real mismatch
            pwd_context.dummy_verify()
            logger.info("Login failed: unknown email")
            raise UnauthorizedError("Invalid credentials")
        if not verify_password(password, user.password_hash):
            logger.info(f"Login failed: bad password for user {user.id}")
            raise UnauthorizedError("Invalid credentials")
        return user, self.tokens.issue(user.id)

    def get_current_user(self, token: str) -> User:
        """Resolve an access token to its user."""
        user_id = self.tokens.verify(token)
        user = self.db.get(User, user_id)
        if user is None:
            raise UnauthorizedError("User not found")
        return user

    def update_user(self, user: User, name: str | None = None, email: str | None = None) -> User:
        """Change name and/or email; fields left as None are kept."""
        if name is not None:
            if not name.strip():
                raise ValidationError("Name is required", field="name")
            user.name = name.strip()
        if email is not None:
            email = email.lower()
            if email != user.email:
                taken = self.db.query(User).filter(User.email == email, User.id != user.id).first()
                if taken:
                    raise ConflictError("Email already in use")
                user.email = email

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Email already in use") from None
        self.db.refresh(user)
        return user

    def delete_account(self, user: User) -> None:
        """Delete the user together with the stations they created."""
        user_id = user.id
        self.db.delete(user)
        self.db.commit()
        logger.info(f"Deleted user {user_id} and their stations")

    def forgot_password(self, email: str) -> str:
        """Issue a password reset token and email it to the user.

        Returns the raw token; only its digest is stored.
        """
        user = self.get_user_by_email(email)
        if user is None:
            raise NotFoundError("There is no user with that email")

        token = secrets.token_hex(20)
        user.reset_token_hash = hash_reset_token(token)
        user.reset_token_expires_at = datetime.now(UTC) + timedelta(
            minutes=settings.reset_token_expiration_minutes
        )
        self.db.commit()

        reset_url = f"{settings.frontend_url.rstrip('/')}/reset-password/{token}"
        if not self.mailer.send_password_reset(user.email, reset_url):
            user.clear_reset_token()
            self.db.commit()
            raise EmailDeliveryError()

        logger.info(f"Password reset requested for user {user.id}")
        return token

    def reset_password(self, reset_token: str, new_password: str) -> tuple[User, str]:
        """Set a new password using an emailed reset token."""
        _check_password(new_password)

        user = (
            self.db.query(User)
            .filter(
                User.reset_token_hash == hash_reset_token(reset_token),
                User.reset_token_expires_at > datetime.now(UTC),
            )
            .first()
        )
        if user is None:
            raise InvalidOrExpiredTokenError()

        user.password_hash = get_password_hash(new_password)
        user.clear_reset_token()
        self.db.commit()

        logger.info(f"Password reset completed for user {user.id}")
        return user, self.tokens.issue(user.id)

    def update_password(self, user: User, current_password: str, new_password: str) -> str:
        """Change the password of a logged-in user."""
        if not verify_password(current_password, user.password_hash):
            raise UnauthorizedError("Current password is incorrect")
        _check_password(new_password, field="newPassword")

        user.password_hash = get_password_hash(new_password)
        self.db.commit()
        return self.tokens.issue(user.id)
