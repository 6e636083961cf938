"""Password hashing (bcrypt) and session token signing/verification (JWT)."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt

from app.core.exceptions import HashingError, InvalidTokenError, TokenSigningError
from app.schemas.auth import SessionClaims

if TYPE_CHECKING:
    from app.core.config import Settings

# bcrypt only looks at the first 72 bytes of the password.
BCRYPT_MAX_PASSWORD_BYTES = 72


def _password_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


class PasswordHasher:
    """One-way salted password hashing with a fixed bcrypt work factor."""

    def __init__(self, rounds: int) -> None:
        self.rounds = rounds

    @classmethod
    def from_settings(cls, settings: Settings) -> PasswordHasher:
        return cls(rounds=settings.BCRYPT_ROUNDS)

    def hash(self, plain_password: str) -> str:
        """Hash a plain-text password for storage. Do not store plain passwords."""
        try:
            salt = bcrypt.gensalt(rounds=self.rounds)
            return bcrypt.hashpw(_password_bytes(plain_password), salt).decode("utf-8")
        except (ValueError, TypeError, AttributeError) as e:
            raise HashingError("Password hashing error") from e

    def verify(self, plain_password: str, hashed: str) -> bool:
        """
        Return True if plain_password reproduces hashed.

        Raises HashingError when hashed is not a valid bcrypt hash.
        """
        try:
            return bcrypt.checkpw(_password_bytes(plain_password), hashed.encode("utf-8"))
        except (ValueError, TypeError, AttributeError) as e:
            raise HashingError("Password comparison error") from e


class SessionTokenSigner:
    """Signs and verifies JWT session tokens carrying SessionClaims."""

    def __init__(self, secret: str, algorithm: str, expire_minutes: int) -> None:
        self._secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> SessionTokenSigner:
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.JWT_EXPIRE_MINUTES,
        )

    def sign(self, claims: SessionClaims) -> str:
        """Create a JWT with id, email, role, iat and exp."""
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            **claims.model_dump(),
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        try:
            return jwt.encode(payload, self._secret, algorithm=self.algorithm)
        except (jwt.PyJWTError, NotImplementedError, TypeError, ValueError) as e:
            raise TokenSigningError() from e

    def verify(self, token: str) -> SessionClaims:
        """
        Decode and validate a token; return its claims.
        Raises InvalidTokenError on bad signature, expiry, or malformed payload.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError() from e
        try:
            return SessionClaims(
                id=payload["id"],
                email=payload["email"],
                role=payload["role"],
            )
        except (KeyError, ValueError) as e:
            raise InvalidTokenError("Invalid token payload") from e
