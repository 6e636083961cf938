"""Session cookie read/write helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request, Response

if TYPE_CHECKING:
    from app.core.config import Settings

SAMESITE = "strict"
COOKIE_PATH = "/"


class SessionCookies:
    """HTTP-only, same-site-strict cookie; Secure when serving over HTTPS (prod)."""

    def __init__(self, max_age: int, secure: bool) -> None:
        self.max_age = max_age
        self.secure = secure

    @classmethod
    def from_settings(cls, settings: Settings) -> SessionCookies:
        return cls(max_age=settings.AUTH_COOKIE_MAX_AGE_SEC, secure=settings.cookie_secure)

    def set(self, response: Response, name: str, token: str) -> None:
        response.set_cookie(
            key=name,
            value=token,
            max_age=self.max_age,
            path=COOKIE_PATH,
            httponly=True,
            secure=self.secure,
            samesite=SAMESITE,
        )

    def clear(self, response: Response, name: str) -> None:
        response.delete_cookie(
            key=name,
            path=COOKIE_PATH,
            httponly=True,
            secure=self.secure,
            samesite=SAMESITE,
        )

    @staticmethod
    def get(request: Request, name: str) -> str | None:
        return request.cookies.get(name) or None
