"""Server-side query prefetching and the hydration boundary that reads it back.

A page prefetches the data its interactive section needs, dehydrates the
query cache into a JSON snapshot, and hands the snapshot to the template. The
same snapshot is embedded in the page so client code starts from a cache hit.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any, Union

logger = logging.getLogger(__name__)

QueryKey = Union[str, Sequence[Any]]
FetchFn = Callable[[], Awaitable[Any]]

STATE_ELEMENT_ID = "__SAVOURY_STATE__"


def normalize_key(key: QueryKey) -> tuple:
    """``"feed"`` and ``["feed"]`` are the same query."""
    if isinstance(key, str):
        return (key,)
    return tuple(key)


def hash_key(key: QueryKey) -> str:
    return json.dumps(list(normalize_key(key)), separators=(",", ":"), default=str)


@dataclass
class CacheEntry:
    query_key: tuple
    data: Any
    data_updated_at: float


class QueryCache:
    """Request-scoped query results keyed by hashed query key."""

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: QueryKey) -> CacheEntry | None:
        return self._entries.get(hash_key(key))

    def put(self, key: QueryKey, data: Any, updated_at: float | None = None) -> None:
        self._entries[hash_key(key)] = CacheEntry(
            query_key=normalize_key(key),
            data=data,
            data_updated_at=time.time() if updated_at is None else updated_at,
        )

    def entries(self) -> list[CacheEntry]:
        return list(self._entries.values())


class QueryClient:
    def __init__(self) -> None:
        self._cache = QueryCache()

    async def prefetch_query(self, key: QueryKey, fetch_fn: FetchFn) -> None:
        """Run ``fetch_fn`` once and store the result.

        Errors propagate to the caller unchanged and nothing is cached.
        """
        data = await fetch_fn()
        self._cache.put(key, data)
        logger.debug("Prefetched %s", hash_key(key))

    async def fetch_query(self, key: QueryKey, fetch_fn: FetchFn) -> Any:
        await self.prefetch_query(key, fetch_fn)
        return self._cache.get(key).data

    def get_query_data(self, key: QueryKey) -> Any:
        entry = self._cache.get(key)
        return entry.data if entry else None

    def dehydrate(self) -> dict:
        """JSON-serialisable snapshot of every cached query."""
        return {
            "queries": [
                {
                    "query_key": list(entry.query_key),
                    "data": entry.data,
                    "data_updated_at": entry.data_updated_at,
                }
                for entry in self._cache.entries()
            ]
        }


async def prefetch(key: QueryKey, fetch_fn: FetchFn) -> dict:
    """Prefetch a single query into a fresh client and return the snapshot."""
    client = QueryClient()
    await client.prefetch_query(key, fetch_fn)
    return client.dehydrate()


class HydrationBoundary:
    """Exposes a dehydrated snapshot to the code rendered beneath it."""

    def __init__(self, state: dict | None):
        self._state = state or {"queries": []}
        self._cache = QueryCache()
        for query in self._state.get("queries", []):
            self._cache.put(query["query_key"], query.get("data"), query.get("data_updated_at"))

    def get_query_data(self, key: QueryKey) -> Any:
        entry = self._cache.get(key)
        return entry.data if entry else None

    async def ensure_query_data(self, key: QueryKey, fetch_fn: FetchFn) -> Any:
        """Cached data on a hit; ``fetch_fn`` runs only on a miss."""
        entry = self._cache.get(key)
        if entry is not None:
            return entry.data
        data = await fetch_fn()
        self._cache.put(key, data)
        return data

    def to_json(self) -> str:
        """Snapshot for a ``<script type="application/json">`` element.

        ``<``, ``>`` and ``&`` are escaped so payload text cannot close the tag.
        """
        raw = json.dumps(self._state, default=str)
        return raw.replace("<", "\\u003c").replace(">", "\\u003e").replace("&", "\\u0026")
