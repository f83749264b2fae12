"""Unit tests for PolicyEnforcer and close_session.

Tests cover:
- load_actor (missing and deactivated users are UNAUTHORIZED)
- load_user (NOT_FOUND with a custom message)
- authorize (FORBIDDEN with required_permission)
- scope
- close_session (persist and publish only when the log was active)
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from src.application.errors import ApplicationErrorCode
from src.application.services import PolicyEnforcer, close_session, validation_failed
from src.core.result import Failure, Success
from src.domain.errors import AuthenticationError, ImpersonationError, UserError
from src.domain.events import ImpersonationSessionEnded
from src.domain.policies import ScopeFilter, UserPolicy
from tests.utils.factories import (
    create_test_audit_log,
    create_test_user,
    users_repo_returning,
)


@pytest.mark.unit
class TestPolicyEnforcer:
    """Test actor/target loading and authorization."""

    @pytest.mark.asyncio
    async def test_load_actor(self, admin_user):
        repo = AsyncMock()
        repo.find_by_id.side_effect = users_repo_returning(admin_user)

        result = await PolicyEnforcer(repo).load_actor(admin_user.id)

        assert isinstance(result, Success)
        assert result.value is admin_user

    @pytest.mark.asyncio
    async def test_missing_actor_is_unauthorized(self, admin_user):
        repo = AsyncMock()
        repo.find_by_id.return_value = None

        result = await PolicyEnforcer(repo).load_actor(admin_user.id)

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.UNAUTHORIZED
        assert result.error.message == AuthenticationError.USER_NOT_FOUND

    @pytest.mark.asyncio
    async def test_inactive_actor_is_unauthorized(self):
        inactive = create_test_user(is_active=False)
        repo = AsyncMock()
        repo.find_by_id.side_effect = users_repo_returning(inactive)

        result = await PolicyEnforcer(repo).load_actor(inactive.id)

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_load_user_not_found_message(self, regular_user):
        repo = AsyncMock()
        repo.find_by_id.return_value = None
        enforcer = PolicyEnforcer(repo)

        default = await enforcer.load_user(regular_user.id)
        custom = await enforcer.load_user(
            regular_user.id, message=ImpersonationError.USER_NOT_FOUND
        )

        assert default.error.code == ApplicationErrorCode.NOT_FOUND
        assert default.error.message == UserError.USER_NOT_FOUND
        assert custom.error.message == ImpersonationError.USER_NOT_FOUND
        assert custom.error.details == {"user_id": str(regular_user.id)}

    def test_authorize_denied_is_forbidden(self, regular_user, admin_user):
        result = PolicyEnforcer.authorize(regular_user, admin_user, "destroy")

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.FORBIDDEN
        assert result.error.details == {"required_permission": "UserPolicy.destroy"}
        assert result.error.domain_error is not None

    def test_authorize_granted(self, admin_user, regular_user):
        result = PolicyEnforcer.authorize(admin_user, regular_user, "update")

        assert isinstance(result, Success)
        assert result.value is regular_user

    def test_scope(self, regular_user):
        assert PolicyEnforcer.scope(regular_user, UserPolicy) == ScopeFilter.by_id(
            regular_user.id
        )

    def test_validation_failed_stringifies_details(self):
        failure = validation_failed("Bad input", field="email", attempt=2)

        assert failure.error.code == ApplicationErrorCode.COMMAND_VALIDATION_FAILED
        assert failure.error.details == {"field": "email", "attempt": "2"}
        assert validation_failed("Bad input").error.details is None


@pytest.mark.unit
class TestCloseSession:
    """Test close_session()."""

    @pytest.mark.asyncio
    async def test_active_log_is_ended_and_published(self):
        log = create_test_audit_log()
        repo, bus = AsyncMock(), AsyncMock()

        closed = await close_session(log, "timeout", audit_log_repo=repo, event_bus=bus)

        assert closed is True
        assert log.end_reason == "timeout"
        repo.update.assert_awaited_once_with(log)
        event = bus.publish.call_args.args[0]
        assert isinstance(event, ImpersonationSessionEnded)
        assert event.end_reason == "timeout"
        assert event.audit_log_id == log.id

    @pytest.mark.asyncio
    async def test_ended_log_is_left_alone(self):
        log = create_test_audit_log(ended_at=datetime.now(UTC))
        repo, bus = AsyncMock(), AsyncMock()

        closed = await close_session(log, "timeout", audit_log_repo=repo, event_bus=bus)

        assert closed is False
        repo.update.assert_not_awaited()
        bus.publish.assert_not_awaited()
