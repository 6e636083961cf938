"""Registration and credential checks on top of the user repository and password hasher."""

import logging

from app.core.exceptions import (
    AuthenticationError,
    AuthErrorKind,
    AuthServiceError,
    DuplicateEmailError,
    InvalidCredentialsError,
    UserCreationError,
    UserNotFoundError,
)
from app.core.security import PasswordHasher
from app.repositories.users import UserRepository
from app.schemas.auth import UserProfile, UserRecord, normalize_email

logger = logging.getLogger(__name__)

_CREATE_PASSTHROUGH = frozenset({AuthErrorKind.DUPLICATE_EMAIL})
_AUTHENTICATE_PASSTHROUGH = frozenset(
    {AuthErrorKind.USER_NOT_FOUND, AuthErrorKind.INVALID_CREDENTIALS}
)


class AuthService:
    """
    User creation and authentication.

    Expected outcomes (duplicate email, unknown user, wrong password) are raised
    as their own error kinds. Every other failure is logged here and re-raised
    as a generic UserCreationError / AuthenticationError so callers never see
    store or hasher internals.
    """

    def __init__(self, repository: UserRepository, hasher: PasswordHasher) -> None:
        self.repository = repository
        self.hasher = hasher

    def create_user(
        self, name: str, email: str, password: str, role: str = "user"
    ) -> UserProfile:
        """Register a user and return the stored record without its password."""
        try:
            email = normalize_email(email)
            if self.repository.find_by_email(email) is not None:
                raise DuplicateEmailError()
            hashed = self.hasher.hash(password)
            user = self.repository.insert(name, email, hashed, role)
        except AuthServiceError as e:
            if e.kind in _CREATE_PASSTHROUGH:
                logger.info("User creation rejected: %s", e.kind.value)
                raise
            logger.error("User creation error: %s", e.kind.value, exc_info=True)
            raise UserCreationError() from e
        except Exception as e:
            logger.error("User creation error: %s", type(e).__name__, exc_info=True)
            raise UserCreationError() from e

        logger.info("User created", extra={"user_id": user.id, "role": user.role})
        return user

    def authenticate_user(self, email: str, password: str) -> UserRecord:
        """
        Check credentials and return the full stored record.

        The record includes the password hash; callers must project it before
        returning anything to a client.
        """
        try:
            email = normalize_email(email)
            user = self.repository.find_by_email(email)
            if user is None:
                raise UserNotFoundError()
            if not self.hasher.verify(password, user.password):
                raise InvalidCredentialsError()
        except AuthServiceError as e:
            if e.kind in _AUTHENTICATE_PASSTHROUGH:
                logger.info("Authentication rejected: %s", e.kind.value)
                raise
            logger.error("User authentication error: %s", e.kind.value, exc_info=True)
            raise AuthenticationError() from e
        except Exception as e:
            logger.error("User authentication error: %s", type(e).__name__, exc_info=True)
            raise AuthenticationError() from e

        logger.info("User authenticated", extra={"user_id": user.id})
        return user
