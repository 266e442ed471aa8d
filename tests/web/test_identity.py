"""Tests for projecting user records into the chrome view model."""

from __future__ import annotations

from savoury.layouts.identity import project_user
from savoury.models.user import UserRecord
from tests.conftest import USER


def test_full_record_projects_every_field():
    vm = project_user(UserRecord.model_validate(USER))
    assert vm.id == "7"
    assert vm.email == "ada@example.com"
    assert vm.username == "ada"
    assert vm.fullname == "Ada Lovelace"
    assert vm.profile_image == "https://cdn.example.com/ada.png"


def test_missing_record_is_anonymous():
    assert project_user(None) is None


def test_zero_user_id_still_projects():
    vm = project_user(UserRecord(user_id=0))
    assert vm is not None
    assert vm.id == "0"


def test_absent_optional_fields_become_empty_strings():
    vm = project_user(UserRecord(user_id=12, username="chef"))
    assert vm.username == "chef"
    assert vm.email == ""
    assert vm.fullname == ""
    assert vm.profile_image == ""


def test_extra_backend_fields_are_ignored():
    record = UserRecord.model_validate({**USER, "password_hash": "x", "recipes": []})
    assert project_user(record).id == "7"


def test_email_only_record():
    vm = project_user(UserRecord(user_id=42, email="a@b.com"))
    assert vm.model_dump() == {"id": "42", "email": "a@b.com", "username": "", "fullname": "", "profile_image": ""}


def test_projection_is_deterministic():
    record = UserRecord.model_validate(USER)
    assert project_user(record) == project_user(record)
