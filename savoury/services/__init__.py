"""Clients for the REST backend and other external collaborators."""

from __future__ import annotations

from dataclasses import dataclass

from savoury.services.auth_service import AuthService
from savoury.services.feed_service import FeedService
from savoury.services.http_client import ApiClient
from savoury.services.recipe_service import RecipeService
from savoury.services.user_service import UserService


@dataclass
class Services:
    """Per-resource services sharing one ``ApiClient``."""

    api: ApiClient
    auth: AuthService
    feed: FeedService
    recipe: RecipeService
    user: UserService

    @classmethod
    def from_client(cls, api: ApiClient) -> Services:
        return cls(
            api=api,
            auth=AuthService(api),
            feed=FeedService(api),
            recipe=RecipeService(api),
            user=UserService(api),
        )


__all__ = [
    "ApiClient",
    "AuthService",
    "FeedService",
    "RecipeService",
    "Services",
    "UserService",
]
