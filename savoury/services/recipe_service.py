from __future__ import annotations

from typing import Any

from savoury.services.http_client import ApiClient
from savoury.services.requests import RecipeAction, ServiceRequest


class RecipeService:
    """Recipe reads, edits and per-user interactions (bookmark, like, comment)."""

    def __init__(self, api: ApiClient):
        self._api = api

    async def get_recipe(self, recipe_id: int, user_id: int | None = None) -> Any:
        path = f"/recipe/{recipe_id}" if user_id is None else f"/recipe/{recipe_id}/{user_id}"
        return await self._api.send(ServiceRequest("GET", path))

    async def create_recipe(self, data: dict) -> Any:
        return await self._api.send(ServiceRequest("POST", "/recipe", json=data))

    async def edit_recipe(self, recipe_id: int, data: dict) -> Any:
        return await self._api.send(ServiceRequest("PUT", f"/recipe/{recipe_id}", json=data))

    async def toggle_bookmark(self, recipe_id: int, user_id: int) -> Any:
        return await self._api.send(
            ServiceRequest("PUT", f"/recipe/{recipe_id}/{user_id}", action=RecipeAction.BOOKMARK)
        )

    async def toggle_like(self, recipe_id: int, user_id: int) -> Any:
        return await self._api.send(
            ServiceRequest("PUT", f"/recipe/{recipe_id}/{user_id}", action=RecipeAction.LIKE)
        )

    async def add_comment(self, recipe_id: int, user_id: int, text: str) -> Any:
        return await self._api.send(
            ServiceRequest(
                "POST",
                f"/recipe/{recipe_id}/{user_id}",
                action=RecipeAction.NEW_COMMENT,
                json={"comment_text": text},
            )
        )
