"""UserRepository protocol for user persistence.

Port (interface) for hexagonal architecture.
Infrastructure layer implements this protocol.
"""

from typing import Protocol
from uuid import UUID

from src.domain.entities.user import User
from src.domain.enums.user_sort import UserSort
from src.domain.policies.scope import ScopeFilter


class UserRepository(Protocol):
    """User repository protocol (port).

    This is a Protocol (not ABC) for structural typing.
    Implementations don't need to inherit from this.

    Methods:
        find_by_id: Retrieve user by ID
        find_by_email: Retrieve user by email (case-insensitive)
        exists_by_email: Duplicate check before creation
        save: Create new user
        update: Update existing user
        delete: Soft delete (is_active=False)
        list_users / count_users: Scoped, searchable listing
    """

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find user by ID.

        Args:
            user_id: User's unique identifier.

        Returns:
            User if found (active or not), None otherwise.
        """
        ...

    async def find_by_email(self, email: str) -> User | None:
        """Find user by email address (case-insensitive)."""
        ...

    async def exists_by_email(self, email: str) -> bool:
        """Check if a user with this email exists (case-insensitive)."""
        ...

    async def save(self, user: User) -> None:
        """Create new user in database.

        Raises:
            DatabaseError: If database operation fails.
        """
        ...

    async def update(self, user: User) -> None:
        """Update existing user in database.

        Raises:
            NoResultFound: If user doesn't exist.
        """
        ...

    async def delete(self, user_id: UUID) -> None:
        """Soft delete user (sets is_active=False).

        Raises:
            NoResultFound: If user doesn't exist.
        """
        ...

    async def list_users(
        self,
        *,
        scope: ScopeFilter,
        search: str | None = None,
        sort: UserSort = UserSort.CREATED,
        limit: int = 20,
        offset: int = 0,
    ) -> list[User]:
        """List active users visible through ``scope``.

        Args:
            scope: Resolved UserPolicy scope.
            search: Case-insensitive substring matched against email,
                first name and last name.
            sort: Sort order (default: newest first).
            limit: Page size.
            offset: Rows to skip.

        Returns:
            Users in the requested order.
        """
        ...

    async def count_users(
        self,
        *,
        scope: ScopeFilter,
        search: str | None = None,
    ) -> int:
        """Count active users matching the same filters as list_users."""
        ...
