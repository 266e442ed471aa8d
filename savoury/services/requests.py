"""Typed requests against the REST backend.

The backend multiplexes several operations on one endpoint through an
``action`` query parameter. Callers never build that string themselves: each
service method constructs a ``ServiceRequest`` tagged with one of the enums
below, and the client serialises the tag onto the wire.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class AuthAction(str, Enum):
    LOGIN = "login"
    LOGOUT = "logout"
    SEND_REGISTER_OTP = "send_register_otp"
    RESEND_OTP = "resend_otp"
    VERIFY_REGISTER_OTP = "verify_register_otp"
    FORGOT_PASSWORD_SEND_OTP = "forgot_pass_send_otp"
    FORGOT_PASSWORD_VERIFY = "forgot_pass_verify"
    FORGOT_PASSWORD_RESET = "forgot_pass_reset_pass"


class RecipeAction(str, Enum):
    BOOKMARK = "bookmark"
    LIKE = "like"
    NEW_COMMENT = "new_comment"


class NotificationAction(str, Enum):
    MARK_READ = "mark_read"


Action = AuthAction | RecipeAction | NotificationAction


@dataclass(frozen=True)
class ServiceRequest:
    method: str
    path: str
    action: Action | None = None
    params: dict[str, Any] = field(default_factory=dict)
    json: Any = None

    def query_params(self) -> dict[str, Any]:
        """Query string for the request; the action tag always comes first."""
        query: dict[str, Any] = {}
        if self.action is not None:
            query["action"] = self.action.value
        query.update({k: v for k, v in self.params.items() if v is not None})
        return query
