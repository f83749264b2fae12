"""User domain events.

Pattern: 3 events per workflow (ATTEMPTED → SUCCEEDED/FAILED)

Workflows:
    1. User login
    2. Admin role promotion
    3. Admin role demotion

Lifecycle events (UserCreated, UserUpdated, UserDeactivated) are published
once the change is persisted.

Handlers:
- LoggingEventHandler: ALL events
"""

from dataclasses import dataclass, field
from uuid import UUID

from src.domain.events.base_event import DomainEvent


# ═══════════════════════════════════════════════════════════════
# User Login (Workflow 1)
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True, kw_only=True, slots=True)
class UserLoginAttempted(DomainEvent):
    """Login attempt initiated. The email is logged, never the password."""

    email: str


@dataclass(frozen=True, kw_only=True, slots=True)
class UserLoginSucceeded(DomainEvent):
    user_id: UUID
    email: str


@dataclass(frozen=True, kw_only=True, slots=True)
class UserLoginFailed(DomainEvent):
    """Login failed.

    Attributes:
        email: Email that was tried.
        reason: "invalid_credentials" or "account_inactive".
    """

    email: str
    reason: str


# ═══════════════════════════════════════════════════════════════
# Admin Role Promotion (Workflow 2)
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True, kw_only=True, slots=True)
class AdminRolePromotionAttempted(DomainEvent):
    """Promotion to system administrator initiated.

    Attributes:
        user_id: User to promote.
        promoted_by: Administrator performing the change.
    """

    user_id: UUID
    promoted_by: UUID


@dataclass(frozen=True, kw_only=True, slots=True)
class AdminRolePromotionSucceeded(DomainEvent):
    user_id: UUID
    promoted_by: UUID


@dataclass(frozen=True, kw_only=True, slots=True)
class AdminRolePromotionFailed(DomainEvent):
    """Promotion failed (e.g. "user_not_found", "not_authorized")."""

    user_id: UUID
    promoted_by: UUID
    reason: str


# ═══════════════════════════════════════════════════════════════
# Admin Role Demotion (Workflow 3)
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True, kw_only=True, slots=True)
class AdminRoleDemotionAttempted(DomainEvent):
    user_id: UUID
    demoted_by: UUID


@dataclass(frozen=True, kw_only=True, slots=True)
class AdminRoleDemotionSucceeded(DomainEvent):
    user_id: UUID
    demoted_by: UUID


@dataclass(frozen=True, kw_only=True, slots=True)
class AdminRoleDemotionFailed(DomainEvent):
    """Demotion failed (e.g. "user_not_found", "not_authorized")."""

    user_id: UUID
    demoted_by: UUID
    reason: str


# ═══════════════════════════════════════════════════════════════
# Lifecycle
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True, kw_only=True, slots=True)
class UserCreated(DomainEvent):
    user_id: UUID
    email: str
    role: str
    created_by: UUID


@dataclass(frozen=True, kw_only=True, slots=True)
class UserUpdated(DomainEvent):
    """User attributes changed.

    Attributes:
        changed_fields: Names of the attributes that changed (never values).
    """

    user_id: UUID
    updated_by: UUID
    changed_fields: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, kw_only=True, slots=True)
class UserDeactivated(DomainEvent):
    """User soft deleted."""

    user_id: UUID
    deactivated_by: UUID
