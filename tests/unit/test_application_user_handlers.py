"""Unit tests for user management command and query handlers.

Tests cover:
- CreateUser (authorization, confirmation, duplicate email, UserCreated)
- UpdateUser (permitted attributes, validation, role changes and their
  events, UserUpdated)
- DeleteUser (soft delete, self-delete denied)
- PromoteUserToAdmin / DemoteUserFromAdmin (3-event workflow)
- GetUser / ListUsers (policy and scope)
"""

from unittest.mock import AsyncMock, Mock

import pytest

from src.application.commands.handlers.change_admin_role_handlers import (
    DemoteUserFromAdminHandler,
    PromoteUserToAdminHandler,
    _AdminRoleHandler,
)
from src.application.commands.handlers.create_user_handler import CreateUserHandler
from src.application.commands.handlers.delete_user_handler import DeleteUserHandler
from src.application.commands.handlers.update_user_handler import UpdateUserHandler
from src.application.commands.user_commands import (
    CreateUser,
    DeleteUser,
    DemoteUserFromAdmin,
    PromoteUserToAdmin,
    UpdateUser,
)
from src.application.errors import ApplicationErrorCode
from src.application.queries.handlers.user_query_handlers import (
    GetUserHandler,
    ListUsersHandler,
)
from src.application.queries.user_queries import GetUser, ListUsers
from src.core.result import Failure, Success
from src.domain.enums import UserRole, UserSort
from src.domain.errors import UserError
from src.domain.events import (
    AdminRoleDemotionAttempted,
    AdminRoleDemotionFailed,
    AdminRoleDemotionSucceeded,
    AdminRolePromotionAttempted,
    AdminRolePromotionFailed,
    AdminRolePromotionSucceeded,
    UserCreated,
    UserDeactivated,
    UserUpdated,
)
from src.domain.policies import ScopeFilter
from tests.utils.factories import users_repo_returning


def _published(event_bus):
    return [call.args[0] for call in event_bus.publish.call_args_list]


@pytest.fixture
def user_repo(admin_user, other_admin, regular_user):
    repo = AsyncMock()
    repo.find_by_id.side_effect = users_repo_returning(
        admin_user, other_admin, regular_user
    )
    repo.exists_by_email.return_value = False
    return repo


@pytest.fixture
def password_service():
    service = Mock()
    service.hash_password.side_effect = lambda password: f"hashed:{password}"
    return service


@pytest.fixture
def event_bus():
    return AsyncMock()


# =============================================================================
# CreateUser
# =============================================================================


@pytest.mark.unit
class TestCreateUserHandler:
    """Test CreateUser command handling."""

    @pytest.mark.asyncio
    async def test_admin_creates_user(
        self, admin_user, user_repo, password_service, event_bus
    ):
        # Arrange
        handler = CreateUserHandler(user_repo, password_service, event_bus, Mock())

        # Act
        result = await handler.handle(
            CreateUser(
                actor_id=admin_user.id,
                email="new@example.com",
                password="s3cret-pass",
                password_confirmation="s3cret-pass",
                first_name="New",
            )
        )

        # Assert
        assert isinstance(result, Success)
        assert result.value.email == "new@example.com"
        assert result.value.role == "default"
        saved = user_repo.save.call_args.args[0]
        assert saved.password_hash == "hashed:s3cret-pass"
        event = _published(event_bus)[0]
        assert isinstance(event, UserCreated)
        assert event.created_by == admin_user.id

    @pytest.mark.asyncio
    async def test_regular_user_cannot_create(
        self, regular_user, user_repo, password_service, event_bus
    ):
        handler = CreateUserHandler(user_repo, password_service, event_bus, Mock())

        result = await handler.handle(
            CreateUser(
                actor_id=regular_user.id,
                email="new@example.com",
                password="s3cret-pass",
            )
        )

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.FORBIDDEN
        user_repo.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_confirmation_mismatch(
        self, admin_user, user_repo, password_service, event_bus
    ):
        handler = CreateUserHandler(user_repo, password_service, event_bus, Mock())

        result = await handler.handle(
            CreateUser(
                actor_id=admin_user.id,
                email="new@example.com",
                password="s3cret-pass",
                password_confirmation="different",
            )
        )

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.COMMAND_VALIDATION_FAILED
        assert result.error.details == {"field": "password_confirmation"}

    @pytest.mark.asyncio
    async def test_duplicate_email_is_conflict(
        self, admin_user, user_repo, password_service, event_bus
    ):
        user_repo.exists_by_email.return_value = True
        handler = CreateUserHandler(user_repo, password_service, event_bus, Mock())

        result = await handler.handle(
            CreateUser(
                actor_id=admin_user.id,
                email="user@example.com",
                password="s3cret-pass",
            )
        )

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.CONFLICT
        assert result.error.message == UserError.EMAIL_ALREADY_EXISTS
        event_bus.publish.assert_not_awaited()


# =============================================================================
# UpdateUser
# =============================================================================


@pytest.mark.unit
class TestUpdateUserHandler:
    """Test UpdateUser command handling."""

    @pytest.mark.asyncio
    async def test_user_updates_own_names(
        self, regular_user, user_repo, password_service, event_bus
    ):
        # Arrange
        handler = UpdateUserHandler(user_repo, password_service, event_bus, Mock())

        # Act
        result = await handler.handle(
            UpdateUser(
                actor_id=regular_user.id,
                user_id=regular_user.id,
                changes={"first_name": "  Linda ", "last_name": "   "},
            )
        )

        # Assert
        assert isinstance(result, Success)
        assert result.value.first_name == "Linda"
        assert result.value.last_name is None
        user_repo.update.assert_awaited_once_with(regular_user)
        event = _published(event_bus)[0]
        assert isinstance(event, UserUpdated)
        assert event.changed_fields == ("first_name", "last_name")

    @pytest.mark.asyncio
    async def test_user_cannot_change_own_role(
        self, regular_user, user_repo, password_service, event_bus
    ):
        handler = UpdateUserHandler(user_repo, password_service, event_bus, Mock())

        result = await handler.handle(
            UpdateUser(
                actor_id=regular_user.id,
                user_id=regular_user.id,
                changes={"role": "system_admin", "first_name": "Eve"},
            )
        )

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.FORBIDDEN
        assert result.error.message == UserError.ATTRIBUTE_NOT_PERMITTED
        assert result.error.details == {"attributes": "role"}
        assert regular_user.first_name == "Linus"

    @pytest.mark.asyncio
    async def test_user_cannot_update_someone_else(
        self, regular_user, admin_user, user_repo, password_service, event_bus
    ):
        handler = UpdateUserHandler(user_repo, password_service, event_bus, Mock())

        result = await handler.handle(
            UpdateUser(
                actor_id=regular_user.id,
                user_id=admin_user.id,
                changes={"first_name": "Mallory"},
            )
        )

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.FORBIDDEN

    @pytest.mark.asyncio
    async def test_password_change_is_hashed_and_reported_as_password(
        self, regular_user, user_repo, password_service, event_bus
    ):
        handler = UpdateUserHandler(user_repo, password_service, event_bus, Mock())

        result = await handler.handle(
            UpdateUser(
                actor_id=regular_user.id,
                user_id=regular_user.id,
                changes={
                    "password": "n3w-password",
                    "password_confirmation": "n3w-password",
                },
            )
        )

        assert isinstance(result, Success)
        assert regular_user.password_hash == "hashed:n3w-password"
        assert _published(event_bus)[0].changed_fields == ("password",)

    @pytest.mark.asyncio
    async def test_short_password_fails_without_changes(
        self, regular_user, user_repo, password_service, event_bus
    ):
        handler = UpdateUserHandler(user_repo, password_service, event_bus, Mock())

        result = await handler.handle(
            UpdateUser(
                actor_id=regular_user.id,
                user_id=regular_user.id,
                changes={"first_name": "Changed", "password": "123"},
            )
        )

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.COMMAND_VALIDATION_FAILED
        assert result.error.details == {"field": "password"}
        assert regular_user.first_name == "Linus"
        user_repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_email(
        self, regular_user, user_repo, password_service, event_bus
    ):
        handler = UpdateUserHandler(user_repo, password_service, event_bus, Mock())

        result = await handler.handle(
            UpdateUser(
                actor_id=regular_user.id,
                user_id=regular_user.id,
                changes={"email": "not-an-email"},
            )
        )

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.COMMAND_VALIDATION_FAILED
        assert result.error.details == {"field": "email"}

    @pytest.mark.asyncio
    async def test_taken_email_is_conflict(
        self, regular_user, user_repo, password_service, event_bus
    ):
        user_repo.exists_by_email.return_value = True
        handler = UpdateUserHandler(user_repo, password_service, event_bus, Mock())

        result = await handler.handle(
            UpdateUser(
                actor_id=regular_user.id,
                user_id=regular_user.id,
                changes={"email": "grace@example.com"},
            )
        )

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.CONFLICT

    @pytest.mark.asyncio
    async def test_unchanged_email_skips_uniqueness_check(
        self, regular_user, user_repo, password_service, event_bus
    ):
        handler = UpdateUserHandler(user_repo, password_service, event_bus, Mock())

        result = await handler.handle(
            UpdateUser(
                actor_id=regular_user.id,
                user_id=regular_user.id,
                changes={"email": "USER@example.com"},
            )
        )

        assert isinstance(result, Success)
        user_repo.exists_by_email.assert_not_awaited()
        user_repo.update.assert_not_awaited()
        event_bus.publish.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_admin_promotes_through_update(
        self, admin_user, regular_user, user_repo, password_service, event_bus
    ):
        handler = UpdateUserHandler(user_repo, password_service, event_bus, Mock())

        result = await handler.handle(
            UpdateUser(
                actor_id=admin_user.id,
                user_id=regular_user.id,
                changes={"role": "system_admin"},
            )
        )

        assert isinstance(result, Success)
        assert regular_user.role == UserRole.SYSTEM_ADMIN
        events = _published(event_bus)
        assert [type(e) for e in events] == [
            AdminRolePromotionAttempted,
            AdminRolePromotionSucceeded,
            UserUpdated,
        ]
        assert events[1].promoted_by == admin_user.id
        assert events[2].changed_fields == ("role",)

    @pytest.mark.asyncio
    async def test_admin_demotes_through_update(
        self, admin_user, other_admin, user_repo, password_service, event_bus
    ):
        handler = UpdateUserHandler(user_repo, password_service, event_bus, Mock())

        result = await handler.handle(
            UpdateUser(
                actor_id=admin_user.id,
                user_id=other_admin.id,
                changes={"role": "default"},
            )
        )

        assert isinstance(result, Success)
        assert other_admin.role == UserRole.DEFAULT
        events = _published(event_bus)
        assert isinstance(events[0], AdminRoleDemotionAttempted)
        assert isinstance(events[1], AdminRoleDemotionSucceeded)
        assert events[1].demoted_by == admin_user.id

    @pytest.mark.asyncio
    async def test_admin_cannot_demote_self_through_update(
        self, admin_user, user_repo, password_service, event_bus
    ):
        handler = UpdateUserHandler(user_repo, password_service, event_bus, Mock())

        result = await handler.handle(
            UpdateUser(
                actor_id=admin_user.id,
                user_id=admin_user.id,
                changes={"role": "default", "first_name": "Augusta"},
            )
        )

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.FORBIDDEN
        assert admin_user.role == UserRole.SYSTEM_ADMIN
        assert admin_user.first_name == "Ada"
        user_repo.update.assert_not_awaited()
        failed = _published(event_bus)[-1]
        assert isinstance(failed, AdminRoleDemotionFailed)
        assert failed.reason == "not_authorized"

    @pytest.mark.asyncio
    async def test_unknown_role(
        self, admin_user, regular_user, user_repo, password_service, event_bus
    ):
        handler = UpdateUserHandler(user_repo, password_service, event_bus, Mock())

        result = await handler.handle(
            UpdateUser(
                actor_id=admin_user.id,
                user_id=regular_user.id,
                changes={"role": "root"},
            )
        )

        assert isinstance(result, Failure)
        assert result.error.message == UserError.INVALID_ROLE

    @pytest.mark.asyncio
    async def test_missing_target(
        self, admin_user, user_repo, password_service, event_bus
    ):
        from uuid_extensions import uuid7

        handler = UpdateUserHandler(user_repo, password_service, event_bus, Mock())

        result = await handler.handle(
            UpdateUser(actor_id=admin_user.id, user_id=uuid7(), changes={})
        )

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.NOT_FOUND


# =============================================================================
# DeleteUser
# =============================================================================


@pytest.mark.unit
class TestDeleteUserHandler:
    """Test DeleteUser command handling."""

    @pytest.mark.asyncio
    async def test_admin_deactivates_user(
        self, admin_user, regular_user, user_repo, event_bus
    ):
        handler = DeleteUserHandler(user_repo, event_bus, Mock())

        result = await handler.handle(
            DeleteUser(actor_id=admin_user.id, user_id=regular_user.id)
        )

        assert isinstance(result, Success)
        user_repo.delete.assert_awaited_once_with(regular_user.id)
        event = _published(event_bus)[0]
        assert isinstance(event, UserDeactivated)
        assert event.deactivated_by == admin_user.id

    @pytest.mark.asyncio
    async def test_admin_cannot_delete_self(self, admin_user, user_repo, event_bus):
        handler = DeleteUserHandler(user_repo, event_bus, Mock())

        result = await handler.handle(
            DeleteUser(actor_id=admin_user.id, user_id=admin_user.id)
        )

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.FORBIDDEN
        assert result.error.details == {"required_permission": "UserPolicy.destroy"}
        user_repo.delete.assert_not_awaited()


# =============================================================================
# Admin role changes
# =============================================================================


@pytest.mark.unit
class TestAdminRoleHandlers:
    """Test PromoteUserToAdmin and DemoteUserFromAdmin."""

    def test_role_handler_hooks_are_abstract(self, user_repo, event_bus):
        class PartialHandler(_AdminRoleHandler):
            query = "promote_to_admin"

            def _apply(self, user):
                user.promote_to_admin()

        with pytest.raises(TypeError):
            _AdminRoleHandler(user_repo, event_bus, Mock())
        with pytest.raises(TypeError):
            PartialHandler(user_repo, event_bus, Mock())

    @pytest.mark.asyncio
    async def test_promote(self, admin_user, regular_user, user_repo, event_bus):
        # Arrange
        handler = PromoteUserToAdminHandler(user_repo, event_bus, Mock())

        # Act
        result = await handler.handle(
            PromoteUserToAdmin(actor_id=admin_user.id, user_id=regular_user.id)
        )

        # Assert
        assert isinstance(result, Success)
        assert result.value.role == "system_admin"
        user_repo.update.assert_awaited_once_with(regular_user)
        events = _published(event_bus)
        assert isinstance(events[0], AdminRolePromotionAttempted)
        assert isinstance(events[1], AdminRolePromotionSucceeded)
        assert events[1].promoted_by == admin_user.id

    @pytest.mark.asyncio
    async def test_promote_by_regular_user_fails(
        self, regular_user, admin_user, user_repo, event_bus
    ):
        handler = PromoteUserToAdminHandler(user_repo, event_bus, Mock())

        result = await handler.handle(
            PromoteUserToAdmin(actor_id=regular_user.id, user_id=regular_user.id)
        )

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.FORBIDDEN
        failed = _published(event_bus)[-1]
        assert isinstance(failed, AdminRolePromotionFailed)
        assert failed.reason == "not_authorized"

    @pytest.mark.asyncio
    async def test_promote_missing_user(self, admin_user, user_repo, event_bus):
        from uuid_extensions import uuid7

        handler = PromoteUserToAdminHandler(user_repo, event_bus, Mock())

        result = await handler.handle(
            PromoteUserToAdmin(actor_id=admin_user.id, user_id=uuid7())
        )

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.NOT_FOUND
        assert _published(event_bus)[-1].reason == "user_not_found"

    @pytest.mark.asyncio
    async def test_demote(self, admin_user, other_admin, user_repo, event_bus):
        handler = DemoteUserFromAdminHandler(user_repo, event_bus, Mock())

        result = await handler.handle(
            DemoteUserFromAdmin(actor_id=admin_user.id, user_id=other_admin.id)
        )

        assert isinstance(result, Success)
        assert other_admin.role == UserRole.DEFAULT
        events = _published(event_bus)
        assert isinstance(events[0], AdminRoleDemotionAttempted)
        assert isinstance(events[1], AdminRoleDemotionSucceeded)

    @pytest.mark.asyncio
    async def test_demote_non_admin_is_denied(
        self, admin_user, regular_user, user_repo, event_bus
    ):
        handler = DemoteUserFromAdminHandler(user_repo, event_bus, Mock())

        result = await handler.handle(
            DemoteUserFromAdmin(actor_id=admin_user.id, user_id=regular_user.id)
        )

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.FORBIDDEN
        user_repo.update.assert_not_awaited()


# =============================================================================
# Queries
# =============================================================================


@pytest.mark.unit
class TestUserQueryHandlers:
    """Test GetUser and ListUsers."""

    @pytest.mark.asyncio
    async def test_get_self(self, regular_user, user_repo):
        result = await GetUserHandler(user_repo).handle(
            GetUser(actor_id=regular_user.id, user_id=regular_user.id)
        )

        assert isinstance(result, Success)
        assert result.value.full_name == "Linus User"

    @pytest.mark.asyncio
    async def test_get_other_user_is_forbidden(
        self, regular_user, admin_user, user_repo
    ):
        result = await GetUserHandler(user_repo).handle(
            GetUser(actor_id=regular_user.id, user_id=admin_user.id)
        )

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.FORBIDDEN

    @pytest.mark.asyncio
    async def test_list_as_admin(self, admin_user, regular_user, user_repo):
        # Arrange
        user_repo.list_users.return_value = [regular_user]
        user_repo.count_users.return_value = 41

        # Act
        result = await ListUsersHandler(user_repo).handle(
            ListUsers(
                actor_id=admin_user.id,
                search="  linus ",
                sort=UserSort.NAME,
                page=3,
                per_page=20,
            )
        )

        # Assert
        assert isinstance(result, Success)
        assert result.value.total_count == 41
        assert result.value.total_pages == 3
        user_repo.list_users.assert_awaited_once_with(
            scope=ScopeFilter.all(),
            search="linus",
            sort=UserSort.NAME,
            limit=20,
            offset=40,
        )
        user_repo.count_users.assert_awaited_once_with(
            scope=ScopeFilter.all(), search="linus"
        )

    @pytest.mark.asyncio
    async def test_list_as_user_is_scoped_to_self(self, regular_user, user_repo):
        user_repo.list_users.return_value = [regular_user]
        user_repo.count_users.return_value = 1

        result = await ListUsersHandler(user_repo).handle(
            ListUsers(actor_id=regular_user.id, search="   ", page=0)
        )

        assert isinstance(result, Success)
        assert result.value.page == 1
        kwargs = user_repo.list_users.call_args.kwargs
        assert kwargs["scope"] == ScopeFilter.by_id(regular_user.id)
        assert kwargs["search"] is None
        assert kwargs["offset"] == 0
