"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AuthResponse,
    MessageResponse,
    PublicUser,
    SessionClaims,
    SignInRequest,
    SignUpRequest,
    UserProfile,
    UserRecord,
    ValidationErrorResponse,
)
from app.schemas.health import HealthResponse

__all__ = [
    "AuthResponse",
    "HealthResponse",
    "MessageResponse",
    "PublicUser",
    "SessionClaims",
    "SignInRequest",
    "SignUpRequest",
    "UserProfile",
    "UserRecord",
    "ValidationErrorResponse",
]
