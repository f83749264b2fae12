"""User queries (CQRS read operations)."""

from dataclasses import dataclass
from uuid import UUID

from src.domain.enums.user_sort import UserSort


@dataclass(frozen=True, kw_only=True)
class GetUser:
    """Fetch one user the actor may see."""

    actor_id: UUID
    user_id: UUID


@dataclass(frozen=True, kw_only=True)
class ListUsers:
    """List users visible to the actor.

    Attributes:
        actor_id: Acting user.
        search: Case-insensitive match on email, first or last name.
        sort: name, email or created (default, newest first).
        page: 1-based page number.
        per_page: Page size (default 20).
    """

    actor_id: UUID
    search: str | None = None
    sort: UserSort = UserSort.CREATED
    page: int = 1
    per_page: int = 20
