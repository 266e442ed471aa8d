"""Signed-cookie session management."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from starlette.requests import Request
from starlette.responses import Response

from savoury.config import settings
from savoury.exceptions import SessionError
from savoury.models.user import Session
from savoury.utils.cookies import delete_cookie, get_cookie, set_cookie

logger = logging.getLogger(__name__)

ACCESS_COOKIE = "access_token"
REFRESH_COOKIE = "refresh_token"
ALGORITHM = "HS256"


@dataclass
class SessionTokens:
    access_token: str
    refresh_token: str


def create_session_tokens(user_id: int, email: str, username: str) -> SessionTokens:
    """Issue an access token (1 day) and a refresh token (7 days)."""
    now = datetime.now(timezone.utc)
    access = jwt.encode(
        {
            "user_id": user_id,
            "email": email,
            "username": username,
            "iat": now,
            "exp": now + timedelta(hours=settings.access_token_ttl_hours),
        },
        settings.app_secret_key,
        algorithm=ALGORITHM,
    )
    refresh = jwt.encode(
        {
            "user_id": user_id,
            "iat": now,
            "exp": now + timedelta(days=settings.refresh_token_ttl_days),
        },
        settings.app_secret_key,
        algorithm=ALGORITHM,
    )
    return SessionTokens(access_token=access, refresh_token=refresh)


def verify_token(token: str) -> dict:
    """Return the token claims. Raises SessionError for bad signature, expiry or garbage."""
    try:
        return jwt.decode(token, settings.app_secret_key, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        raise SessionError("Session expired") from e
    except jwt.InvalidTokenError as e:
        raise SessionError(f"Invalid session token: {e}") from e


def is_valid_session(claims: dict) -> bool:
    user_id = claims.get("user_id")
    return (
        isinstance(user_id, int)
        and not isinstance(user_id, bool)
        and isinstance(claims.get("email"), str)
        and isinstance(claims.get("username"), str)
    )


def get_session(request: Request) -> Session | None:
    """Read the session from the access-token cookie. Never raises."""
    token = get_cookie(request, ACCESS_COOKIE)
    if not token:
        return None
    try:
        claims = verify_token(token)
    except SessionError as e:
        logger.debug("Ignoring session cookie: %s", e)
        return None
    if not is_valid_session(claims):
        logger.warning("Session token has malformed claims")
        return None
    return Session(
        user_id=claims["user_id"],
        email=claims["email"],
        username=claims["username"],
        token=token,
        expires_at=claims.get("exp"),
    )


def set_session_cookies(response: Response, tokens: SessionTokens) -> None:
    set_cookie(
        response,
        ACCESS_COOKIE,
        tokens.access_token,
        max_age=60 * 60 * 24,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    set_cookie(
        response,
        REFRESH_COOKIE,
        tokens.refresh_token,
        max_age=60 * 60 * 24 * settings.refresh_cookie_max_age_days,
        secure=settings.cookie_secure,
        samesite="lax",
    )


def delete_session(response: Response) -> None:
    delete_cookie(response, ACCESS_COOKIE)
    delete_cookie(response, REFRESH_COOKIE)
