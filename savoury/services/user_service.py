from __future__ import annotations

from typing import Any

from savoury.services.http_client import ApiClient
from savoury.services.requests import NotificationAction, ServiceRequest


class UserService:
    def __init__(self, api: ApiClient):
        self._api = api

    async def fetch_user_profile(self, user: int | str) -> Any:
        """Profile by numeric id or by username; the backend accepts either."""
        return await self._api.send(ServiceRequest("GET", f"/profile/{user}"))

    async def get_saved_recipe_posts(self, user_id: int) -> Any:
        return await self._api.send(ServiceRequest("GET", f"/saved/{user_id}"))

    async def fetch_notifications(self, page: int = 1, limit: int = 10) -> Any:
        return await self._api.send(
            ServiceRequest("GET", "/notifications", params={"page": page, "limit": limit})
        )

    async def mark_notification_read(self, notification_id: int) -> Any:
        return await self._api.send(
            ServiceRequest(
                "PUT",
                "/notifications",
                action=NotificationAction.MARK_READ,
                params={"notificationId": notification_id},
            )
        )
