"""Shared test fixtures for Savoury."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from savoury.auth.resolver import ApiUserResolver, CookieSessionAccessor
from savoury.auth.sessions import ACCESS_COOKIE, REFRESH_COOKIE, create_session_tokens
from savoury.services import ApiClient, Services


# ---------------------------------------------------------------------------
# Test data
# ---------------------------------------------------------------------------

API_BASE_URL = "http://backend.test/api"

USER_ID = 7
USER = {
    "user_id": USER_ID,
    "email": "ada@example.com",
    "username": "ada",
    "fullname": "Ada Lovelace",
    "profile_image": "https://cdn.example.com/ada.png",
}

RECIPE = {
    "recipe_id": 5,
    "user_id": USER_ID,
    "title": "Buttermilk Pancakes",
    "category": "breakfast",
    "description": "Fluffy weekend pancakes",
    "prep_time_minutes": 10,
    "cook_time_minutes": 20,
    "servings": 4,
    "recipeIngredients": [
        {"quantity": 2, "unit": "cups", "ingredient": {"ingredient_name": "flour"}},
        {"quantity": 3, "unit": None, "ingredient": {"ingredient_name": "eggs"}},
    ],
    "instructions": [
        {"step_number": 2, "step_text": "Cook on a hot griddle"},
        {"step_number": 1, "step_text": "Whisk everything together"},
    ],
    "comments": [],
    "user": {"username": "ada", "fullname": "Ada Lovelace"},
}


# ---------------------------------------------------------------------------
# Fake collaborators
# ---------------------------------------------------------------------------

class FakeBackend:
    """Routes backend requests by (method, path) and records every call.

    Unrouted requests answer 404.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], tuple[int, Any]] = {}
        self.requests: list[httpx.Request] = []

    def route(self, method: str, path: str, status: int = 200, body: Any = None):
        self.routes[(method.upper(), path)] = (status, body)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method.upper() and r.url.path == path]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.routes.get((request.method, request.url.path), (404, {"error": "Not found"}))
        return httpx.Response(status, json=body)


class FakeSearch:
    def __init__(self, results: list[dict] | None = None):
        self.results = results or []
        self.queries: list[str] = []

    async def search_recipes(self, query: str, size: int = 10) -> dict:
        self.queries.append(query)
        return {"results": self.results, "total": len(self.results)}

    async def close(self):
        pass


class FakeMailer:
    configured = True

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.sent: list[tuple[str, str, str, str]] = []

    async def send_contact_message(self, name: str, email: str, subject: str, message: str) -> None:
        if self.error:
            raise self.error
        self.sent.append((name, email, subject, message))


def request_body(request: httpx.Request) -> Any:
    return json.loads(request.content) if request.content else None


# ---------------------------------------------------------------------------
# App / client fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def backend() -> FakeBackend:
    fake = FakeBackend()
    fake.route("GET", f"/api/profile/{USER_ID}", body={"user": USER})
    return fake


@pytest.fixture
def search() -> FakeSearch:
    return FakeSearch()


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest_asyncio.fixture
async def app(backend, search, mailer):
    """FastAPI app with fake collaborators injected on ``app.state``."""
    from savoury.main import app as fastapi_app

    api = ApiClient(base_url=API_BASE_URL, transport=httpx.MockTransport(backend.handler))
    services = Services.from_client(api)
    fastapi_app.state.services = services
    fastapi_app.state.search = search
    fastapi_app.state.mailer = mailer
    fastapi_app.state.session_accessor = CookieSessionAccessor()
    fastapi_app.state.user_resolver = ApiUserResolver(services.user)

    yield fastapi_app

    await api.close()


@pytest_asyncio.fixture
async def client(app):
    """Async HTTP client for testing. Redirects are not followed."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def session_headers() -> dict[str, str]:
    """Cookie header carrying a fresh session for ``USER``."""
    tokens = create_session_tokens(USER_ID, USER["email"], USER["username"])
    return {"Cookie": f"{ACCESS_COOKIE}={tokens.access_token}; {REFRESH_COOKIE}={tokens.refresh_token}"}
