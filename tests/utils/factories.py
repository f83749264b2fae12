"""Factories for domain entities used across test suites."""

from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from uuid_extensions import uuid7

from src.domain.entities.impersonation_audit_log import ImpersonationAuditLog
from src.domain.entities.user import User
from src.domain.enums import ImpersonationAction, UserRole


def create_test_user(
    user_id: UUID | None = None,
    email: str = "test@example.com",
    password_hash: str = "hashed_password",
    first_name: str | None = None,
    last_name: str | None = None,
    role: UserRole = UserRole.DEFAULT,
    is_active: bool = True,
    created_at: datetime | None = None,
) -> User:
    """Create a User with sensible defaults."""
    now = created_at or datetime.now(UTC)
    return User(
        id=user_id or uuid7(),
        email=email,
        password_hash=password_hash,
        first_name=first_name,
        last_name=last_name,
        role=role,
        is_active=is_active,
        created_at=now,
        updated_at=now,
    )


def create_test_audit_log(
    impersonator_id: UUID | None = None,
    impersonated_user_id: UUID | None = None,
    ip_address: str = "203.0.113.7",
    user_agent: str = "pytest-agent",
    session_id: str = "session-1",
    reason: str | None = "Support ticket 42",
    started_at: datetime | None = None,
    ended_at: datetime | None = None,
    metadata: dict[str, Any] | None = None,
) -> ImpersonationAuditLog:
    """Create an ImpersonationAuditLog, active unless ``ended_at`` is given."""
    started = started_at or datetime.now(UTC)
    return ImpersonationAuditLog(
        id=uuid7(),
        impersonator_id=impersonator_id or uuid7(),
        impersonated_user_id=impersonated_user_id or uuid7(),
        action=ImpersonationAction.START,
        reason=reason,
        ip_address=ip_address,
        user_agent=user_agent,
        session_id=session_id,
        started_at=started,
        ended_at=ended_at,
        metadata=dict(metadata or {}),
        created_at=started,
    )


def users_repo_returning(*users: User):
    """AsyncMock-compatible side effect for ``find_by_id`` over ``users``."""
    by_id = {user.id: user for user in users}

    async def find_by_id(user_id: UUID) -> User | None:
        return by_id.get(user_id)

    return find_by_id
