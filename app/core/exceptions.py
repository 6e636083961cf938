"""Typed auth errors. The API layer dispatches on ``kind``, never on message text."""

from enum import Enum


class AuthErrorKind(str, Enum):
    """Every failure the auth core can report."""

    INTERNAL = "internal"
    DUPLICATE_EMAIL = "duplicate_email"
    USER_NOT_FOUND = "user_not_found"
    INVALID_CREDENTIALS = "invalid_credentials"
    USER_CREATION = "user_creation"
    AUTHENTICATION = "authentication"
    HASHING = "hashing"
    TOKEN_SIGNING = "token_signing"
    INVALID_TOKEN = "invalid_token"


class AuthServiceError(Exception):
    """Base class for auth errors; subclasses fix ``kind`` and a default message."""

    kind: AuthErrorKind = AuthErrorKind.INTERNAL
    default_message = "Internal auth error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class DuplicateEmailError(AuthServiceError):
    kind = AuthErrorKind.DUPLICATE_EMAIL
    default_message = "User with this email already exists"


class UserNotFoundError(AuthServiceError):
    kind = AuthErrorKind.USER_NOT_FOUND
    default_message = "User not found"


class InvalidCredentialsError(AuthServiceError):
    kind = AuthErrorKind.INVALID_CREDENTIALS
    default_message = "Invalid credentials"


class UserCreationError(AuthServiceError):
    """Any unexpected failure while registering a user."""

    kind = AuthErrorKind.USER_CREATION
    default_message = "User creation error"


class AuthenticationError(AuthServiceError):
    """Any unexpected failure while checking credentials."""

    kind = AuthErrorKind.AUTHENTICATION
    default_message = "User authentication error"


class HashingError(AuthServiceError):
    """Raised by the password hasher. Never carries the plaintext or the hash."""

    kind = AuthErrorKind.HASHING
    default_message = "Password hashing error"


class TokenSigningError(AuthServiceError):
    kind = AuthErrorKind.TOKEN_SIGNING
    default_message = "Session token signing error"


class InvalidTokenError(AuthServiceError):
    """Session token is missing, tampered with, or expired."""

    kind = AuthErrorKind.INVALID_TOKEN
    default_message = "Invalid or expired token"
