"""Cookie read/write helpers for server-side handlers."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Literal

from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)


def get_cookie(request: Request, name: str) -> str | None:
    value = request.cookies.get(name)
    return value or None


def set_cookie(
    response: Response,
    name: str,
    value: str,
    *,
    max_age: int | None = None,
    expires: datetime | None = None,
    path: str = "/",
    domain: str | None = None,
    secure: bool = False,
    httponly: bool = False,
    samesite: Literal["lax", "strict", "none"] = "lax",
) -> None:
    response.set_cookie(
        key=name,
        value=value,
        max_age=max_age,
        expires=expires,
        path=path,
        domain=domain,
        secure=secure,
        httponly=httponly,
        samesite=samesite,
    )


def delete_cookie(response: Response, name: str, *, path: str = "/", domain: str | None = None) -> None:
    response.delete_cookie(key=name, path=path, domain=domain)
