"""Route guard middleware: keeps signed-in users off the auth pages and
anonymous users off the member pages."""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from savoury.auth.sessions import ACCESS_COOKIE, REFRESH_COOKIE, verify_token
from savoury.exceptions import SessionError
from savoury.utils.cookies import delete_cookie

logger = logging.getLogger(__name__)

# Pages a signed-in user has no business on
AUTH_PATHS = {"/login", "/register", "/forgot"}

# Pages that need a session (access token, or at least a live refresh token)
MEMBER_PATH_PREFIXES = (
    "/feed",
    "/profile",
    "/search",
    "/saved",
    "/notifications",
    "/recipe",
    "/user",
    "/new",
    "/edit",
)


def _is_member_path(path: str) -> bool:
    return any(path == p or path.startswith(p + "/") for p in MEMBER_PATH_PREFIXES)


def _token_ok(token: str | None) -> bool:
    if not token:
        return False
    try:
        verify_token(token)
    except SessionError:
        return False
    return True


class RouteGuardMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        access = request.cookies.get(ACCESS_COOKIE)
        refresh = request.cookies.get(REFRESH_COOKIE)

        if path in AUTH_PATHS or path.startswith(("/register/", "/forgot/")):
            if _token_ok(access):
                return RedirectResponse("/", status_code=303)
            return await call_next(request)

        if not _is_member_path(path):
            return await call_next(request)

        if not access and not refresh:
            return RedirectResponse("/login", status_code=303)

        if _token_ok(access):
            return await call_next(request)
        if _token_ok(refresh):
            return await call_next(request)

        logger.info("Rejected stale session on %s", path)
        response = RedirectResponse("/login", status_code=303)
        if access:
            delete_cookie(response, ACCESS_COOKIE)
        if refresh:
            delete_cookie(response, REFRESH_COOKIE)
        return response
