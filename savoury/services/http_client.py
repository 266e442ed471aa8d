"""Async HTTP client for the Savoury REST backend."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from savoury.exceptions import AuthenticationError, NotFoundError, RateLimitError, ServiceError
from savoury.services.requests import ServiceRequest

logger = logging.getLogger(__name__)


class ApiClient:
    """Sends ``ServiceRequest`` values to the backend and decodes JSON replies.

    Usage:
        async with ApiClient(base_url="http://localhost:3000/api") as api:
            data = await api.send(ServiceRequest("GET", "/feed"))

    Non-2xx replies raise a ``ServiceError`` subclass; there are no automatic
    retries, the page decides what to render.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={"Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    async def send(self, request: ServiceRequest, token: str | None = None) -> Any:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        try:
            resp = await self._http.request(
                request.method,
                request.path,
                params=request.query_params(),
                json=request.json,
                headers=headers,
            )
        except httpx.TransportError as e:
            logger.warning("%s %s failed: %s", request.method, request.path, e)
            raise ServiceError("Failed to connect to Savoury API") from e

        if resp.status_code >= 400:
            raise _error_for(resp)
        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    async def close(self):
        await self._http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.close()


def _error_for(resp: httpx.Response) -> ServiceError:
    message = _error_message(resp)
    logger.info("API error %d on %s: %s", resp.status_code, resp.request.url.path, message)
    if resp.status_code == 401:
        return AuthenticationError(message or "Authentication failed")
    if resp.status_code == 404:
        return NotFoundError(message or "Resource not found")
    if resp.status_code == 429:
        retry_after = resp.headers.get("retry-after")
        return RateLimitError(int(retry_after) if retry_after and retry_after.isdigit() else None)
    return ServiceError(message or f"API error: {resp.status_code}", status_code=resp.status_code)


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text.strip()
    if isinstance(body, dict):
        err = body.get("error", body.get("message"))
        if isinstance(err, dict):
            return str(err.get("message", ""))
        if err:
            return str(err)
    return ""
