"""Request/response schemas for auth endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

Role = Literal["user", "admin"]

EMAIL_MAX_LEN = 255


def normalize_email(email: str) -> str:
    """Emails are compared and stored lower-cased without surrounding whitespace."""
    return email.strip().lower()


class SignUpRequest(BaseModel):
    """Registration payload."""

    name: str = Field(..., min_length=2, max_length=255, description="Display name")
    email: EmailStr = Field(..., description="Email address (unique)")
    password: str = Field(..., min_length=1, max_length=128, description="Password")
    role: Role = Field(default="user", description="Role")

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, v: object) -> object:
        return normalize_email(v) if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def limit_email_length(cls, v: str) -> str:
        if len(v) > EMAIL_MAX_LEN:
            raise ValueError(f"Email must be at most {EMAIL_MAX_LEN} characters")
        return v


class SignInRequest(BaseModel):
    """Credentials for sign-in."""

    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=1, max_length=128, description="Password")

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, v: object) -> object:
        return normalize_email(v) if isinstance(v, str) else v


class UserProfile(BaseModel):
    """Sanitized user record: never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str
    created_at: datetime | None = None


class UserRecord(UserProfile):
    """Full stored user, including the password hash. Must not leave the API layer."""

    password: str
    updated_at: datetime | None = None


class PublicUser(BaseModel):
    """User shape returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str


class AuthResponse(BaseModel):
    """Response for sign-up and sign-in."""

    message: str
    user: PublicUser


class MessageResponse(BaseModel):
    message: str


class SessionClaims(BaseModel):
    """Identity claims embedded in the session token."""

    id: int
    email: str
    role: str


class FieldError(BaseModel):
    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    """400 body when the request payload fails validation."""

    error: str = "Validation failed"
    details: list[FieldError]
