"""Unit tests for the User domain entity.

Tests cover:
- Identity (equality and hashing by id)
- Name helpers (full_name, display_name, initials)
- Role helpers (system_admin, role_name, promote/demote)
- Soft delete (deactivate)
"""

from datetime import UTC, datetime, timedelta

import pytest
from uuid_extensions import uuid7

from src.domain.enums import UserRole
from tests.utils.factories import create_test_user


@pytest.mark.unit
class TestUserIdentity:
    """Two users are the same user when their ids match."""

    def test_users_with_same_id_are_equal(self):
        user_id = uuid7()
        first = create_test_user(user_id=user_id, email="a@example.com")
        second = create_test_user(user_id=user_id, email="b@example.com")

        assert first == second
        assert hash(first) == hash(second)

    def test_users_with_different_ids_are_not_equal(self):
        assert create_test_user() != create_test_user()

    def test_user_is_not_equal_to_other_types(self):
        user = create_test_user()

        assert user != user.id
        assert user != "user"


@pytest.mark.unit
class TestUserNames:
    """Test full_name, display_name and initials."""

    def test_full_name_joins_first_and_last(self):
        user = create_test_user(first_name=" Ada ", last_name="Lovelace ")

        assert user.full_name() == "Ada Lovelace"

    def test_full_name_with_only_last_name(self):
        user = create_test_user(last_name="Lovelace")

        assert user.full_name() == "Lovelace"

    def test_full_name_is_none_when_blank(self):
        user = create_test_user(first_name="  ", last_name=None)

        assert user.full_name() is None

    def test_display_name_falls_back_to_email(self):
        user = create_test_user(email="ada@example.com")

        assert user.display_name() == "ada@example.com"

    def test_display_name_prefers_full_name(self):
        user = create_test_user(first_name="Ada", last_name="Lovelace")

        assert user.display_name() == "Ada Lovelace"

    @pytest.mark.parametrize(
        ("first_name", "last_name", "email", "expected"),
        [
            ("ada", "lovelace", "x@example.com", "AL"),
            ("grace", None, "x@example.com", "GR"),
            (None, "hopper", "grace@example.com", "GR"),
            (None, None, "", "U"),
        ],
    )
    def test_initials(self, first_name, last_name, email, expected):
        user = create_test_user(first_name=first_name, last_name=last_name, email=email)

        assert user.initials() == expected


@pytest.mark.unit
class TestUserRoles:
    """Test role helpers and role changes."""

    def test_default_role(self):
        user = create_test_user()

        assert user.role == UserRole.DEFAULT
        assert user.system_admin is False
        assert user.is_admin() is False
        assert user.role_name() == "Default"

    def test_system_admin_role(self):
        user = create_test_user(role=UserRole.SYSTEM_ADMIN)

        assert user.system_admin is True
        assert user.role_name() == "System admin"

    def test_promote_to_admin_updates_timestamp(self):
        past = datetime.now(UTC) - timedelta(days=1)
        user = create_test_user(created_at=past)

        user.promote_to_admin()

        assert user.system_admin is True
        assert user.updated_at > past

    def test_demote_from_admin(self):
        user = create_test_user(role=UserRole.SYSTEM_ADMIN)

        user.demote_from_admin()

        assert user.role == UserRole.DEFAULT

    def test_deactivate(self):
        user = create_test_user()

        user.deactivate()

        assert user.is_active is False


@pytest.mark.unit
class TestUserRoleEnum:
    """Test UserRole helpers."""

    def test_values(self):
        assert UserRole.values() == ["default", "system_admin"]

    def test_is_valid(self):
        assert UserRole.is_valid("system_admin") is True
        assert UserRole.is_valid("superuser") is False
