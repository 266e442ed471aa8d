"""Tests for ApiClient.

Uses httpx mock transport to simulate backend responses without real HTTP calls.
"""

from __future__ import annotations

import httpx
import pytest

from savoury.exceptions import AuthenticationError, NotFoundError, RateLimitError, ServiceError
from savoury.services import ApiClient
from savoury.services.requests import AuthAction, ServiceRequest
from tests.conftest import API_BASE_URL, request_body


def _mock_transport(responses: list[tuple[int, dict | None, dict | None]], seen: list | None = None):
    """Create a mock httpx transport that returns pre-configured responses.

    Each item in responses is (status_code, json_body, headers).
    Responses are consumed in order; last one repeats forever.
    """
    call_count = [0]

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        idx = min(call_count[0], len(responses) - 1)
        call_count[0] += 1
        status, body, headers = responses[idx]
        return httpx.Response(status, json=body, headers=headers or {})

    return httpx.MockTransport(handler)


@pytest.mark.asyncio
async def test_send_decodes_json():
    seen = []
    async with ApiClient(API_BASE_URL, transport=_mock_transport([(200, {"recipes": []}, None)], seen)) as api:
        data = await api.send(ServiceRequest("GET", "/feed"))
    assert data == {"recipes": []}
    assert str(seen[0].url) == "http://backend.test/api/feed"
    assert seen[0].headers["accept"] == "application/json"
    assert "authorization" not in seen[0].headers


@pytest.mark.asyncio
async def test_action_is_first_query_param_and_none_params_dropped():
    seen = []
    async with ApiClient(API_BASE_URL, transport=_mock_transport([(200, {}, None)], seen)) as api:
        await api.send(
            ServiceRequest("POST", "/auth", action=AuthAction.LOGIN, params={"x": 1, "skip": None}, json={"a": 1}),
            token="tok",
        )
    assert seen[0].url.query == b"action=login&x=1"
    assert seen[0].headers["authorization"] == "Bearer tok"
    assert request_body(seen[0]) == {"a": 1}


@pytest.mark.asyncio
async def test_empty_body_returns_none():
    async with ApiClient(API_BASE_URL, transport=_mock_transport([(204, None, None)])) as api:
        assert await api.send(ServiceRequest("PUT", "/notifications")) is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status,body,headers,exc_type,message",
    [
        (401, {"error": "Invalid credentials"}, None, AuthenticationError, "Invalid credentials"),
        (404, {"message": "Recipe not found"}, None, NotFoundError, "Recipe not found"),
        (404, None, None, NotFoundError, "Resource not found"),
        (429, {}, {"Retry-After": "30"}, RateLimitError, "Rate limit exceeded. Retry after 30s"),
        (500, {"error": {"code": "DB", "message": "Database down"}}, None, ServiceError, "Database down"),
        (503, {}, None, ServiceError, "API error: 503"),
    ],
)
async def test_error_mapping(status, body, headers, exc_type, message):
    async with ApiClient(API_BASE_URL, transport=_mock_transport([(status, body, headers)])) as api:
        with pytest.raises(exc_type) as exc_info:
            await api.send(ServiceRequest("GET", "/feed"))
    assert exc_info.value.message == message
    assert exc_info.value.status_code == status


@pytest.mark.asyncio
async def test_rate_limit_retry_after():
    async with ApiClient(API_BASE_URL, transport=_mock_transport([(429, None, {"Retry-After": "12"})])) as api:
        with pytest.raises(RateLimitError) as exc_info:
            await api.send(ServiceRequest("GET", "/feed"))
    assert exc_info.value.retry_after == 12


@pytest.mark.asyncio
async def test_connection_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with ApiClient(API_BASE_URL, transport=httpx.MockTransport(handler)) as api:
        with pytest.raises(ServiceError, match="Failed to connect to Savoury API"):
            await api.send(ServiceRequest("GET", "/feed"))
