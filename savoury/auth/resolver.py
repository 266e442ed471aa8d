"""Session lookup and current-user resolution used by page layouts."""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from pydantic import ValidationError
from starlette.requests import Request

from savoury.auth import sessions
from savoury.exceptions import NotFoundError, ServiceError
from savoury.models.user import Session, UserRecord
from savoury.services.user_service import UserService

logger = logging.getLogger(__name__)


@runtime_checkable
class SessionAccessor(Protocol):
    """Reads the caller's session from request-scoped storage."""

    def get_session(self, request: Request) -> Session | None: ...


@runtime_checkable
class UserResolver(Protocol):
    """Loads the full user record behind a session."""

    async def get_current_user(self, session: Session) -> UserRecord | None: ...


class CookieSessionAccessor:
    """Session from the signed ``access_token`` cookie."""

    def get_session(self, request: Request) -> Session | None:
        return sessions.get_session(request)


class ApiUserResolver:
    """Resolves the user through ``GET /profile/{user_id}``.

    A user that no longer exists, or any backend failure, resolves to ``None``.
    """

    def __init__(self, users: UserService):
        self._users = users

    async def get_current_user(self, session: Session) -> UserRecord | None:
        try:
            data = await self._users.fetch_user_profile(session.user_id)
        except NotFoundError:
            logger.info("Session user %s no longer exists", session.user_id)
            return None
        except ServiceError as e:
            logger.warning("Could not resolve user %s: %s", session.user_id, e)
            return None

        user = data.get("user") if isinstance(data, dict) else None
        if not user:
            return None
        try:
            return UserRecord.model_validate(user)
        except ValidationError as e:
            logger.warning("Malformed user record for %s: %s", session.user_id, e)
            return None
