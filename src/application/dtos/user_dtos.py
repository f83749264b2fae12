"""User DTOs (Data Transfer Objects).

Result dataclasses carrying user data from handlers to the presentation
layer. Password hashes never leave the application layer.
"""

from dataclasses import dataclass
from datetime import datetime
from math import ceil
from uuid import UUID

from src.domain.entities.user import User


@dataclass(frozen=True, kw_only=True)
class UserResult:
    """Read model of a user.

    Attributes:
        id: User identifier.
        email: Email address.
        first_name: Given name.
        last_name: Family name.
        full_name: Joined name (None when both are blank).
        display_name: Full name or email.
        initials: Avatar initials.
        role: Role value ("default" or "system_admin").
        role_name: Humanized role.
        is_active: False once soft deleted.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    id: UUID
    email: str
    first_name: str | None
    last_name: str | None
    full_name: str | None
    display_name: str
    initials: str
    role: str
    role_name: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserResult":
        return cls(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            full_name=user.full_name(),
            display_name=user.display_name(),
            initials=user.initials(),
            role=user.role.value,
            role_name=user.role_name(),
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


@dataclass(frozen=True, kw_only=True)
class UserListResult:
    """One page of users.

    Attributes:
        users: Users on this page.
        total_count: Users matching the filters across all pages.
        page: 1-based page number.
        per_page: Page size.
    """

    users: list[UserResult]
    total_count: int
    page: int
    per_page: int

    @property
    def total_pages(self) -> int:
        return ceil(self.total_count / self.per_page) if self.per_page else 0


@dataclass(frozen=True, kw_only=True)
class AccessTokenResult:
    """Access token issued after sign-in or after an impersonation stops.

    Attributes:
        access_token: JWT access token.
        token_type: Always "bearer".
        expires_in: Lifetime in seconds.
        user: The token subject.
    """

    access_token: str
    user: UserResult
    expires_in: int
    token_type: str = "bearer"
