"""Tests for the per-resource backend services."""

from __future__ import annotations

import httpx
import pytest

from savoury.services import ApiClient, Services
from tests.conftest import API_BASE_URL, request_body


@pytest.fixture
def recorded():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    services = Services.from_client(ApiClient(API_BASE_URL, transport=httpx.MockTransport(handler)))
    return services, seen


def _sent(seen: list[httpx.Request]) -> tuple[str, str, dict]:
    [request] = seen
    return request.method, request.url.path, dict(request.url.params)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "call,expected",
    [
        (lambda s: s.auth.login("ada", "pw"), ("POST", "/api/auth", {"action": "login"})),
        (lambda s: s.auth.logout("tok"), ("POST", "/api/auth", {"action": "logout"})),
        (lambda s: s.auth.send_register_otp({}), ("POST", "/api/auth", {"action": "send_register_otp"})),
        (lambda s: s.auth.resend_otp({}), ("POST", "/api/auth", {"action": "resend_otp"})),
        (lambda s: s.auth.verify_register_otp("a@b.co", "1"), ("POST", "/api/auth", {"action": "verify_register_otp"})),
        (lambda s: s.auth.forgot_password_send_otp("a@b.co"), ("POST", "/api/auth", {"action": "forgot_pass_send_otp"})),
        (lambda s: s.auth.verify_forgot_password("a@b.co", "1"), ("POST", "/api/auth", {"action": "forgot_pass_verify"})),
        (lambda s: s.auth.reset_password({}), ("POST", "/api/auth", {"action": "forgot_pass_reset_pass"})),
        (lambda s: s.feed.fetch_feed(), ("GET", "/api/feed", {})),
        (lambda s: s.recipe.get_recipe(5), ("GET", "/api/recipe/5", {})),
        (lambda s: s.recipe.get_recipe(5, 7), ("GET", "/api/recipe/5/7", {})),
        (lambda s: s.recipe.create_recipe({}), ("POST", "/api/recipe", {})),
        (lambda s: s.recipe.edit_recipe(5, {}), ("PUT", "/api/recipe/5", {})),
        (lambda s: s.recipe.toggle_bookmark(5, 7), ("PUT", "/api/recipe/5/7", {"action": "bookmark"})),
        (lambda s: s.recipe.toggle_like(5, 7), ("PUT", "/api/recipe/5/7", {"action": "like"})),
        (lambda s: s.recipe.add_comment(5, 7, "yum"), ("POST", "/api/recipe/5/7", {"action": "new_comment"})),
        (lambda s: s.user.fetch_user_profile(7), ("GET", "/api/profile/7", {})),
        (lambda s: s.user.fetch_user_profile("ada"), ("GET", "/api/profile/ada", {})),
        (lambda s: s.user.get_saved_recipe_posts(7), ("GET", "/api/saved/7", {})),
        (lambda s: s.user.fetch_notifications(), ("GET", "/api/notifications", {"page": "1", "limit": "10"})),
        (lambda s: s.user.mark_notification_read(3), ("PUT", "/api/notifications", {"action": "mark_read", "notificationId": "3"})),
    ],
)
async def test_request_shape(recorded, call, expected):
    services, seen = recorded
    assert await call(services) == {"ok": True}
    assert _sent(seen) == expected


@pytest.mark.asyncio
async def test_resend_otp_sends_only_identity_fields(recorded):
    services, seen = recorded
    await services.auth.resend_otp(
        {"firstName": "Ada", "lastName": "Lovelace", "email": "a@b.co", "username": "ada", "password": "x"}
    )
    assert request_body(seen[0]) == {"firstName": "Ada", "lastName": "Lovelace", "email": "a@b.co", "username": "ada"}


@pytest.mark.asyncio
async def test_logout_sends_bearer_token(recorded):
    services, seen = recorded
    await services.auth.logout("tok")
    assert seen[0].headers["authorization"] == "Bearer tok"
