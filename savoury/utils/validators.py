"""Validation for account and profile forms."""

from __future__ import annotations

import re

PASSWORD_REQUIREMENTS = [
    (re.compile(r".{8,}"), "at least 8 characters"),
    (re.compile(r"[A-Z]"), "an uppercase letter"),
    (re.compile(r"[a-z]"), "a lowercase letter"),
    (re.compile(r"\d"), "a number"),
    (re.compile(r"[^A-Za-z0-9]"), "a special character"),
]

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_USERNAME_RE = re.compile(r"^[A-Za-z0-9_.]{3,30}$")


def validate_password(password: str) -> list[str]:
    """Return the unmet requirements (empty = valid)."""
    return [
        f"Password must contain {label}"
        for pattern, label in PASSWORD_REQUIREMENTS
        if not pattern.search(password or "")
    ]


def is_valid_email(value: str) -> bool:
    return bool(_EMAIL_RE.match(value or ""))


def validate_registration(form: dict) -> list[str]:
    errors = []
    for field, label in (
        ("firstName", "First name"),
        ("lastName", "Last name"),
        ("email", "Email"),
        ("username", "Username"),
    ):
        if not (form.get(field) or "").strip():
            errors.append(f"{label} is required")

    email = (form.get("email") or "").strip()
    if email and not is_valid_email(email):
        errors.append("Email address is invalid")

    username = (form.get("username") or "").strip()
    if username and not _USERNAME_RE.match(username):
        errors.append("Username must be 3-30 letters, numbers, dots or underscores")

    errors.extend(validate_password(form.get("password") or ""))
    if form.get("password") != form.get("confirmPassword"):
        errors.append("Passwords do not match")
    return errors
