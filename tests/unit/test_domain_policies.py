"""Unit tests for record-level authorization policies.

Tests cover:
- ApplicationPolicy defaults (signed in, owner, admin)
- UserPolicy queries and permitted_attributes
- ImpersonationPolicy (admin only, never self or another admin)
- authorize() (Result wrapping, unknown queries, registry lookup)
- Scopes (UserPolicy.Scope, ScopeFilter.matches/apply)
"""

from dataclasses import dataclass
from uuid import UUID

import pytest
from uuid_extensions import uuid7

from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.entities.impersonation_audit_log import ImpersonationAuditLog
from src.domain.entities.user import User
from src.domain.policies import (
    ApplicationPolicy,
    ImpersonationPolicy,
    ScopeFilter,
    ScopeKind,
    UserPolicy,
    authorize,
    policy_class_for,
    policy_scope,
)
from src.domain.policies.impersonation_policy import can_start
from src.domain.policies.user_policy import (
    can_demote,
    can_destroy,
    can_impersonate,
    can_promote,
)


@dataclass
class Note:
    """Record owned through ``user_id`` (no dedicated policy)."""

    id: UUID
    user_id: UUID


# =============================================================================
# ApplicationPolicy
# =============================================================================


@pytest.mark.unit
class TestApplicationPolicy:
    """Default policy for records without a dedicated policy."""

    def test_anonymous_actor_is_denied_everything(self):
        note = Note(id=uuid7(), user_id=uuid7())
        policy = ApplicationPolicy(None, note)

        for query in ApplicationPolicy.queries:
            assert getattr(policy, query)() is False

    def test_owner_can_show_update_destroy(self, regular_user):
        note = Note(id=uuid7(), user_id=regular_user.id)
        policy = ApplicationPolicy(regular_user, note)

        assert policy.show() is True
        assert policy.update() is True
        assert policy.edit() is True
        assert policy.destroy() is True
        assert policy.admin_access() is False

    def test_non_owner_is_denied(self, regular_user):
        note = Note(id=uuid7(), user_id=uuid7())
        policy = ApplicationPolicy(regular_user, note)

        assert policy.index() is True
        assert policy.create() is True
        assert policy.show() is False
        assert policy.destroy() is False

    def test_admin_can_manage_any_record(self, admin_user):
        note = Note(id=uuid7(), user_id=uuid7())
        policy = ApplicationPolicy(admin_user, note)

        assert policy.show() is True
        assert policy.destroy() is True
        assert policy.manage() is True
        assert policy.admin_access() is True

    def test_record_class_is_never_owned(self, regular_user):
        assert ApplicationPolicy(regular_user, Note).owner() is False

    def test_default_scope(self, admin_user, regular_user):
        assert ApplicationPolicy.Scope(admin_user).resolve() == ScopeFilter.all()
        assert ApplicationPolicy.Scope(regular_user).resolve() == ScopeFilter.by_owner(
            regular_user.id
        )
        assert ApplicationPolicy.Scope(None).resolve() == ScopeFilter.none()


# =============================================================================
# UserPolicy
# =============================================================================


@pytest.mark.unit
class TestUserPolicy:
    """User management rules."""

    def test_admin_can_manage_other_users(self, admin_user, regular_user):
        policy = UserPolicy(admin_user, regular_user)

        assert policy.index() is True
        assert policy.show() is True
        assert policy.create() is True
        assert policy.update() is True
        assert policy.destroy() is True
        assert policy.promote_to_admin() is True
        assert policy.manage_roles() is True
        assert policy.view_admin_panel() is True

    def test_user_can_read_and_edit_self_only(self, regular_user):
        policy = UserPolicy(regular_user, regular_user)

        assert policy.show() is True
        assert policy.update() is True
        assert policy.edit_profile() is True
        assert policy.change_password() is True
        assert policy.reset_password() is True
        assert policy.index() is False
        assert policy.create() is False
        assert policy.destroy() is False
        assert policy.promote_to_admin() is False

    def test_user_cannot_see_other_users(self, regular_user, other_admin):
        policy = UserPolicy(regular_user, other_admin)

        assert policy.show() is False
        assert policy.update() is False

    def test_admin_cannot_destroy_or_change_own_role(self, admin_user):
        assert can_destroy(admin_user, admin_user) is False
        assert can_promote(admin_user, admin_user) is False
        assert can_demote(admin_user, admin_user) is False

    def test_demote_requires_admin_target(self, admin_user, other_admin, regular_user):
        assert can_demote(admin_user, other_admin) is True
        assert can_demote(admin_user, regular_user) is False

    def test_impersonate_delegates_to_impersonation_policy(
        self, admin_user, other_admin, regular_user
    ):
        assert can_impersonate(admin_user, regular_user) is True
        assert can_impersonate(admin_user, other_admin) is False
        assert can_impersonate(regular_user, admin_user) is False

    def test_permitted_attributes_for_admin(self, admin_user, regular_user):
        attributes = UserPolicy(admin_user, regular_user).permitted_attributes()

        assert "role" in attributes
        assert set(attributes) == {
            "first_name",
            "last_name",
            "email",
            "password",
            "password_confirmation",
            "role",
        }

    def test_permitted_attributes_for_self_exclude_role(self, regular_user):
        attributes = UserPolicy(regular_user, regular_user).permitted_attributes()

        assert "role" not in attributes
        assert "email" in attributes

    def test_permitted_attributes_for_stranger_are_empty(
        self, regular_user, other_admin
    ):
        assert UserPolicy(regular_user, other_admin).permitted_attributes() == []

    def test_scope(self, admin_user, regular_user):
        assert policy_scope(admin_user, UserPolicy) == ScopeFilter.all()
        assert policy_scope(regular_user, UserPolicy) == ScopeFilter.by_id(
            regular_user.id
        )
        assert policy_scope(None, UserPolicy) == ScopeFilter.none()


# =============================================================================
# ImpersonationPolicy
# =============================================================================


@pytest.mark.unit
class TestImpersonationPolicy:
    """Impersonation rules."""

    def test_admin_can_impersonate_regular_user(self, admin_user, regular_user):
        assert can_start(admin_user, regular_user) is True

    def test_admin_cannot_impersonate_self(self, admin_user):
        assert can_start(admin_user, admin_user) is False

    def test_admin_cannot_impersonate_another_admin(self, admin_user, other_admin):
        assert can_start(admin_user, other_admin) is False

    def test_regular_user_cannot_impersonate(self, regular_user):
        target = User(id=uuid7(), email="t@example.com", password_hash="x")

        assert can_start(regular_user, target) is False

    def test_start_requires_user_record(self, admin_user):
        assert ImpersonationPolicy(admin_user, None).start() is False

    def test_admin_only_queries(self, admin_user, regular_user):
        for query in ("stop", "index", "view_audit_logs", "admin_access"):
            assert getattr(ImpersonationPolicy(admin_user, None), query)() is True
            assert getattr(ImpersonationPolicy(regular_user, None), query)() is False


# =============================================================================
# authorize()
# =============================================================================


@pytest.mark.unit
class TestAuthorize:
    """Test authorize() and policy lookup."""

    def test_granted_query_returns_record(self, admin_user, regular_user):
        result = authorize(admin_user, regular_user, "show")

        assert isinstance(result, Success)
        assert result.value is regular_user

    def test_denied_query_names_policy_and_query(self, regular_user, admin_user):
        result = authorize(regular_user, admin_user, "destroy")

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.PERMISSION_DENIED
        assert result.error.required_permission == "UserPolicy.destroy"

    def test_unknown_query_is_denied(self, admin_user, regular_user):
        result = authorize(admin_user, regular_user, "permitted_attributes")

        assert isinstance(result, Failure)
        assert result.error.required_permission == "UserPolicy.permitted_attributes"

    def test_explicit_policy_class(self, admin_user, regular_user):
        result = authorize(admin_user, regular_user, "start", ImpersonationPolicy)

        assert isinstance(result, Success)

    def test_policy_class_for_records_and_classes(self, regular_user):
        assert policy_class_for(regular_user) is UserPolicy
        assert policy_class_for(User) is UserPolicy
        assert policy_class_for(ImpersonationAuditLog) is ImpersonationPolicy
        assert policy_class_for(Note) is ApplicationPolicy


# =============================================================================
# ScopeFilter
# =============================================================================


@pytest.mark.unit
class TestScopeFilter:
    """Test ScopeFilter.matches() and apply()."""

    def test_all_and_none(self, regular_user):
        assert ScopeFilter.all().matches(regular_user) is True
        assert ScopeFilter.none().matches(regular_user) is False
        assert ScopeFilter.none().kind == ScopeKind.NONE

    def test_by_id(self, regular_user, admin_user):
        scope = ScopeFilter.by_id(regular_user.id)

        assert scope.apply([admin_user, regular_user]) == [regular_user]

    def test_by_owner_matches_user_id(self):
        owner_id = uuid7()
        mine = Note(id=uuid7(), user_id=owner_id)
        theirs = Note(id=uuid7(), user_id=uuid7())

        assert ScopeFilter.by_owner(owner_id).apply([theirs, mine]) == [mine]
