"""Page layout composition: session -> user -> view model -> chrome."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from fastapi import Request

from savoury.auth.resolver import SessionAccessor, UserResolver
from savoury.layouts.identity import project_user
from savoury.models.user import UserViewModel

logger = logging.getLogger(__name__)


class LayoutVariant(str, Enum):
    PUBLIC = "public"  # header + footer
    FEED = "feed"  # header only

    @property
    def template(self) -> str:
        return f"layouts/{self.value}.html"


@dataclass(frozen=True)
class LayoutContext:
    variant: LayoutVariant
    user: UserViewModel | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


async def compose_layout(
    request: Request,
    accessor: SessionAccessor,
    resolver: UserResolver,
    variant: LayoutVariant,
) -> LayoutContext:
    """Resolve who is viewing the page.

    Never fails: no session, a vanished user or a resolver error all give an
    anonymous context, and the page body renders either way.
    """
    session = accessor.get_session(request)
    if session is None:
        return LayoutContext(variant=variant)

    try:
        record = await resolver.get_current_user(session)
    except Exception:
        logger.warning("User resolution failed for session user %s", session.user_id, exc_info=True)
        return LayoutContext(variant=variant)

    return LayoutContext(variant=variant, user=project_user(record))


async def public_layout(request: Request) -> LayoutContext:
    state = request.app.state
    return await compose_layout(request, state.session_accessor, state.user_resolver, LayoutVariant.PUBLIC)


async def feed_layout(request: Request) -> LayoutContext:
    state = request.app.state
    return await compose_layout(request, state.session_accessor, state.user_resolver, LayoutVariant.FEED)
