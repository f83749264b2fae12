"""User management commands (CQRS write operations).

Every command carries ``actor_id``: the user whose permissions are checked.
While impersonating, that is the administrator, not the impersonated user.
"""

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from src.domain.enums.user_role import UserRole
from src.domain.types import Email, Password


@dataclass(frozen=True, kw_only=True)
class CreateUser:
    """Administrator creates an account.

    Attributes:
        actor_id: Acting user.
        email: New user's email (must be unique).
        password: Plaintext password (hashed by the handler).
        password_confirmation: Must equal password when given.
        first_name: Optional given name.
        last_name: Optional family name.
        role: Initial role (default: DEFAULT).
    """

    actor_id: UUID
    email: Email
    password: Password
    password_confirmation: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: UserRole = UserRole.DEFAULT


@dataclass(frozen=True, kw_only=True)
class UpdateUser:
    """Change attributes of a user.

    Only attributes present in ``changes`` are touched. Each must be listed
    by UserPolicy.permitted_attributes for the actor.

    Attributes:
        actor_id: Acting user.
        user_id: User to update.
        changes: Attribute name to new value (first_name, last_name, email,
            password, password_confirmation, role).
    """

    actor_id: UUID
    user_id: UUID
    changes: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class DeleteUser:
    """Soft delete a user (is_active=False)."""

    actor_id: UUID
    user_id: UUID


@dataclass(frozen=True, kw_only=True)
class PromoteUserToAdmin:
    """Grant the system administrator role."""

    actor_id: UUID
    user_id: UUID


@dataclass(frozen=True, kw_only=True)
class DemoteUserFromAdmin:
    """Revoke the system administrator role."""

    actor_id: UUID
    user_id: UUID
