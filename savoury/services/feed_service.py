from __future__ import annotations

from typing import Any

from savoury.services.http_client import ApiClient
from savoury.services.requests import ServiceRequest


class FeedService:
    def __init__(self, api: ApiClient):
        self._api = api

    async def fetch_feed(self) -> Any:
        return await self._api.send(ServiceRequest("GET", "/feed"))
