from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class UserRecord(BaseModel):
    """User row as returned by the backend. Read-only to the web app."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    user_id: int
    email: str | None = None
    username: str | None = None
    fullname: str | None = None
    profile_image: str | None = None


class UserViewModel(BaseModel):
    """What the navigation chrome renders for the signed-in user."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: str = ""
    username: str = ""
    fullname: str = ""
    profile_image: str = ""


class Session(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: int
    email: str
    username: str
    token: str
    expires_at: int | None = None
