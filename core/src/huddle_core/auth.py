from __future__ import annotations

from typing import Any, Final

from fastapi import Request
from starlette.responses import Response

from huddle_core.errors import BadRequest, InternalConfig, Unauthorized

SESSION_COOKIE: Final[str] = "app-authenticated"
SESSION_VALUE: Final[str] = "true"
SESSION_MAX_AGE: Final[int] = 7 * 24 * 60 * 60

LOGIN_PATH: Final[str] = "/login"

_EXEMPT_PREFIXES: Final[tuple[str, ...]] = ("/static", "/favicon", "/api/auth")
_EXEMPT_PATHS: Final[frozenset[str]] = frozenset({LOGIN_PATH, "/healthz"})


def is_exempt_path(path: str) -> bool:
    if path in _EXEMPT_PATHS:
        return True
    if path.startswith(_EXEMPT_PREFIXES):
        return True
    # Anything shaped like a file (robots.txt, icons, source maps).
    if "." in path:
        return True
    return False


def has_session_marker(request: Request) -> bool:
    return request.cookies.get(SESSION_COOKIE) == SESSION_VALUE


def verify_password(submitted: Any, configured: str | None) -> None:
    """Plain equality check of the submitted password against the configured one.

    Raises BadRequest, InternalConfig or Unauthorized; returns None on a match.
    """

    if not submitted:
        raise BadRequest("Password is required")
    if not configured:
        raise InternalConfig("Server configuration error")
    if submitted != configured:
        raise Unauthorized("Invalid password")


def set_session_cookie(response: Response, *, secure: bool) -> None:
    response.set_cookie(
        SESSION_COOKIE,
        SESSION_VALUE,
        max_age=SESSION_MAX_AGE,
        path="/",
        httponly=True,
        samesite="lax",
        secure=secure,
    )


def clear_session_cookie(response: Response, *, secure: bool) -> None:
    response.delete_cookie(
        SESSION_COOKIE,
        path="/",
        httponly=True,
        samesite="lax",
        secure=secure,
    )
