"""Recipe search against the Elasticsearch index."""

from __future__ import annotations

import logging

import httpx

from savoury.exceptions import ServiceError

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ["title^3", "description", "category", "ingredients.ingredient_name"]


class SearchClient:
    """Thin client for the recipe index's ``_search`` endpoint.

    Constructed once per application and closed on shutdown.
    """

    def __init__(
        self,
        base_url: str,
        index: str,
        username: str = "",
        password: str = "",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._index = index
        auth = httpx.BasicAuth(username, password) if username else None
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            auth=auth,
            timeout=timeout,
            transport=transport,
        )

    async def search_recipes(self, query: str, size: int = 10) -> dict:
        query = (query or "").strip()
        if not query:
            raise ValueError("Query parameter 'q' is required.")

        body = {
            "size": size,
            "query": {
                "multi_match": {
                    "query": query,
                    "fields": SEARCH_FIELDS,
                    "fuzziness": "AUTO",
                }
            },
        }
        try:
            resp = await self._http.post(f"/{self._index}/_search", json=body)
        except httpx.TransportError as e:
            logger.warning("Search index unreachable: %s", e)
            raise ServiceError("Search is unavailable right now") from e
        if resp.status_code >= 400:
            logger.error("Search failed (%d): %s", resp.status_code, resp.text[:200])
            raise ServiceError(f"Search error: {resp.status_code}", status_code=resp.status_code)

        hits = resp.json().get("hits") or {}
        results = [{"id": hit.get("_id"), **(hit.get("_source") or {})} for hit in hits.get("hits") or []]
        total = hits.get("total", 0)
        if isinstance(total, dict):
            total = total.get("value", 0)
        return {"results": results, "total": total or 0}

    async def close(self):
        await self._http.aclose()
