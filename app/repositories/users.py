"""User persistence: lookup by email and insert, behind a narrow interface."""

import logging
from typing import Protocol

from psycopg2.errorcodes import UNIQUE_VIOLATION
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import DuplicateEmailError
from app.models import User
from app.schemas.auth import UserProfile, UserRecord

logger = logging.getLogger(__name__)

# Unique index created by the users migration (see app.models.base naming convention).
EMAIL_UNIQUE_CONSTRAINT = "ix_users_email"


class UserRepository(Protocol):
    """Store of user records; email is unique."""

    def find_by_email(self, email: str) -> UserRecord | None:
        """Exact-match lookup; returns at most one record."""
        ...

    def insert(self, name: str, email: str, hashed_password: str, role: str) -> UserProfile:
        """
        Persist a new user and return it without the password.

        Raises DuplicateEmailError if the store rejects the email as a duplicate.
        """
        ...


def _is_email_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    pgcode = getattr(orig, "pgcode", None)
    if pgcode is not None:
        diag = getattr(orig, "diag", None)
        return (
            pgcode == UNIQUE_VIOLATION
            and getattr(diag, "constraint_name", None) == EMAIL_UNIQUE_CONSTRAINT
        )
    # SQLite (tests only) reports no constraint name; its messages are not localized.
    if getattr(orig, "sqlite_errorname", None) == "SQLITE_CONSTRAINT_UNIQUE":
        return str(orig).endswith("users.email")
    return False


class SqlAlchemyUserRepository:
    """UserRepository over the users table."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_email(self, email: str) -> UserRecord | None:
        user = self.session.execute(
            select(User).where(User.email == email).limit(1)
        ).scalar_one_or_none()
        if user is None:
            return None
        return UserRecord.model_validate(user)

    def insert(self, name: str, email: str, hashed_password: str, role: str) -> UserProfile:
        user = User(name=name, email=email, password=hashed_password, role=role)
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            if _is_email_unique_violation(e):
                logger.info("Insert rejected by unique email constraint")
                raise DuplicateEmailError() from e
            raise
        self.session.refresh(user)
        return UserProfile.model_validate(user)
