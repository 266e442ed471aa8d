"""Projection of backend user records into what page chrome renders."""

from __future__ import annotations

from savoury.models.user import UserRecord, UserViewModel


def project_user(record: UserRecord | None) -> UserViewModel | None:
    """Map a user record to its view model.

    ``None`` in, ``None`` out: only a missing record means anonymous. A record
    whose ``user_id`` is falsy (``0``) still projects. The id is always a
    string and absent optional fields become ``""``.
    """
    if record is None:
        return None
    return UserViewModel(
        id=str(record.user_id),
        email=record.email or "",
        username=record.username or "",
        fullname=record.fullname or "",
        profile_image=record.profile_image or "",
    )
