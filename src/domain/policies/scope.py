"""Persistence-agnostic scope resolution.

A policy scope answers "which records may this actor enumerate". Policies
return a ScopeFilter instead of a query so the domain stays free of
SQLAlchemy. Repositories translate the filter into a WHERE clause; in-memory
callers use matches() and apply().

Usage:
    scope = UserPolicy.Scope(actor).resolve()
    users = await user_repo.list(scope=scope, ...)

    visible = scope.apply(candidates)
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar
from uuid import UUID

T = TypeVar("T")


class ScopeKind(str, Enum):
    """Shape of a resolved scope."""

    ALL = "all"
    NONE = "none"
    BY_ID = "by_id"
    BY_OWNER = "by_owner"


@dataclass(frozen=True, slots=True)
class ScopeFilter:
    """Resolved scope.

    Attributes:
        kind: Which records are visible.
        value: Record id (BY_ID) or owner id (BY_OWNER); None otherwise.

    Example:
        >>> ScopeFilter.by_id(actor.id).matches(actor)
        True
        >>> ScopeFilter.none().apply(users)
        []
    """

    kind: ScopeKind
    value: UUID | None = None

    @classmethod
    def all(cls) -> "ScopeFilter":
        return cls(kind=ScopeKind.ALL)

    @classmethod
    def none(cls) -> "ScopeFilter":
        return cls(kind=ScopeKind.NONE)

    @classmethod
    def by_id(cls, record_id: UUID) -> "ScopeFilter":
        return cls(kind=ScopeKind.BY_ID, value=record_id)

    @classmethod
    def by_owner(cls, user_id: UUID) -> "ScopeFilter":
        return cls(kind=ScopeKind.BY_OWNER, value=user_id)

    def matches(self, record: Any) -> bool:
        """Check whether a single record falls inside the scope."""
        match self.kind:
            case ScopeKind.ALL:
                return True
            case ScopeKind.NONE:
                return False
            case ScopeKind.BY_ID:
                return getattr(record, "id", None) == self.value
            case ScopeKind.BY_OWNER:
                if getattr(record, "user_id", None) == self.value:
                    return True
                owner = getattr(record, "user", None)
                return owner is not None and getattr(owner, "id", None) == self.value
        return False

    def apply(self, records: Iterable[T]) -> list[T]:
        """Filter an iterable of records, preserving order."""
        return [record for record in records if self.matches(record)]
