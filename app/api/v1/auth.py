"""Sign-up, sign-in and sign-out endpoints; session token delivered as an HTTP-only cookie."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.cookies import SessionCookies
from app.core.database import get_db
from app.core.exceptions import AuthErrorKind, AuthServiceError, InvalidTokenError
from app.core.security import PasswordHasher, SessionTokenSigner
from app.repositories.users import SqlAlchemyUserRepository, UserRepository
from app.schemas.auth import (
    AuthResponse,
    MessageResponse,
    PublicUser,
    SessionClaims,
    SignInRequest,
    SignUpRequest,
    UserProfile,
)
from app.services.auth import AuthService

logger = logging.getLogger(__name__)
router = APIRouter()

DUPLICATE_EMAIL_MESSAGE = "User with this email already exists"
INVALID_LOGIN_MESSAGE = "Invalid email or password"
NOT_AUTHENTICATED_MESSAGE = "Not authenticated"


def get_user_repository(db: Annotated[Session, Depends(get_db)]) -> UserRepository:
    return SqlAlchemyUserRepository(db)


def get_password_hasher() -> PasswordHasher:
    return PasswordHasher.from_settings(get_settings())


def get_token_signer() -> SessionTokenSigner:
    return SessionTokenSigner.from_settings(get_settings())


def get_session_cookies() -> SessionCookies:
    return SessionCookies.from_settings(get_settings())


def get_auth_service(
    repository: Annotated[UserRepository, Depends(get_user_repository)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> AuthService:
    return AuthService(repository, hasher)


def _issue_session(
    response: Response,
    user: UserProfile,
    signer: SessionTokenSigner,
    cookies: SessionCookies,
) -> None:
    token = signer.sign(SessionClaims(id=user.id, email=user.email, role=user.role))
    cookies.set(response, get_settings().AUTH_COOKIE_NAME, token)


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


@router.post(
    "/sign-up",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": MessageResponse}},
)
def sign_up(
    body: SignUpRequest,
    response: Response,
    service: Annotated[AuthService, Depends(get_auth_service)],
    signer: Annotated[SessionTokenSigner, Depends(get_token_signer)],
    cookies: Annotated[SessionCookies, Depends(get_session_cookies)],
) -> AuthResponse | JSONResponse:
    """Register a user, start a session, and return the public user fields."""
    try:
        user = service.create_user(body.name, body.email, body.password, body.role)
    except AuthServiceError as e:
        if e.kind is AuthErrorKind.DUPLICATE_EMAIL:
            return _message(status.HTTP_400_BAD_REQUEST, DUPLICATE_EMAIL_MESSAGE)
        raise

    _issue_session(response, user, signer, cookies)
    logger.info("User registered successfully", extra={"user_id": user.id})
    return AuthResponse(
        message="User registered successfully",
        user=PublicUser.model_validate(user),
    )


@router.post(
    "/sign-in",
    response_model=AuthResponse,
    responses={401: {"model": MessageResponse}},
)
def sign_in(
    body: SignInRequest,
    response: Response,
    service: Annotated[AuthService, Depends(get_auth_service)],
    signer: Annotated[SessionTokenSigner, Depends(get_token_signer)],
    cookies: Annotated[SessionCookies, Depends(get_session_cookies)],
) -> AuthResponse | JSONResponse:
    """
    Check credentials and start a session.
    Unknown email and wrong password get the same 401 response.
    """
    try:
        user = service.authenticate_user(body.email, body.password)
    except AuthServiceError as e:
        if e.kind in (AuthErrorKind.USER_NOT_FOUND, AuthErrorKind.INVALID_CREDENTIALS):
            return _message(status.HTTP_401_UNAUTHORIZED, INVALID_LOGIN_MESSAGE)
        raise

    _issue_session(response, user, signer, cookies)
    logger.info("User signed in successfully", extra={"user_id": user.id})
    return AuthResponse(
        message="User signed in successfully",
        user=PublicUser.model_validate(user),
    )


@router.post("/sign-out", response_model=MessageResponse)
def sign_out(
    response: Response,
    cookies: Annotated[SessionCookies, Depends(get_session_cookies)],
) -> MessageResponse:
    """Clear the session cookie. The token itself is not revoked."""
    cookies.clear(response, get_settings().AUTH_COOKIE_NAME)
    logger.info("User signed out successfully")
    return MessageResponse(message="User signed out successfully")


@router.get(
    "/me",
    response_model=SessionClaims,
    responses={401: {"model": MessageResponse}},
)
def read_session(
    request: Request,
    signer: Annotated[SessionTokenSigner, Depends(get_token_signer)],
    cookies: Annotated[SessionCookies, Depends(get_session_cookies)],
) -> SessionClaims | JSONResponse:
    """Return the claims carried by the current session cookie."""
    token = cookies.get(request, get_settings().AUTH_COOKIE_NAME)
    if token is None:
        return _message(status.HTTP_401_UNAUTHORIZED, NOT_AUTHENTICATED_MESSAGE)
    try:
        return signer.verify(token)
    except InvalidTokenError:
        return _message(status.HTTP_401_UNAUTHORIZED, NOT_AUTHENTICATED_MESSAGE)
