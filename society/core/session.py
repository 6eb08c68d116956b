"""Session cookie carrier: writes and reads the signed session token."""

from fastapi import Request, Response

from society.config import settings
from society.core.security import SessionClaims, decode_session_token


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.session_max_age,
        path="/",
        secure=settings.is_production,
        httponly=True,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value="",
        max_age=0,
        path="/",
        secure=settings.is_production,
        httponly=True,
        samesite="lax",
    )


def read_session(request: Request) -> SessionClaims | None:
    """Decode the session cookie on a request, None if absent or invalid"""
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    return decode_session_token(token) if token else None
