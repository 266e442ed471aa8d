from __future__ import annotations

from typing import Any

from savoury.services.http_client import ApiClient
from savoury.services.requests import AuthAction, ServiceRequest


class AuthService:
    """Login, logout, registration and password recovery against ``/auth``."""

    def __init__(self, api: ApiClient):
        self._api = api

    async def _post(self, action: AuthAction, payload: dict, token: str | None = None) -> Any:
        return await self._api.send(ServiceRequest("POST", "/auth", action=action, json=payload), token=token)

    async def login(self, identifier: str, password: str) -> Any:
        return await self._post(AuthAction.LOGIN, {"identifier": identifier, "password": password})

    async def logout(self, token: str) -> Any:
        return await self._post(AuthAction.LOGOUT, {}, token=token)

    async def send_register_otp(self, payload: dict) -> Any:
        return await self._post(AuthAction.SEND_REGISTER_OTP, payload)

    async def resend_otp(self, payload: dict) -> Any:
        fields = ("firstName", "lastName", "email", "username")
        return await self._post(AuthAction.RESEND_OTP, {k: payload.get(k) for k in fields})

    async def verify_register_otp(self, email: str, otp: str) -> Any:
        return await self._post(AuthAction.VERIFY_REGISTER_OTP, {"email": email, "otp": otp})

    async def forgot_password_send_otp(self, email: str) -> Any:
        return await self._post(AuthAction.FORGOT_PASSWORD_SEND_OTP, {"email": email})

    async def verify_forgot_password(self, email: str, otp: str) -> Any:
        return await self._post(AuthAction.FORGOT_PASSWORD_VERIFY, {"email": email, "otp": otp})

    async def reset_password(self, payload: dict) -> Any:
        return await self._post(AuthAction.FORGOT_PASSWORD_RESET, payload)
