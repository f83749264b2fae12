"""Result types for railway-oriented programming.

Operations that can fail return a Result instead of raising. A denied
policy check, a missing user or a stale impersonation session are all
ordinary outcomes, so callers pattern-match on them explicitly.

Usage:
    def check(actor: User, target: User) -> Result[User, AuthorizationError]:
        if not UserPolicy(actor, target).show():
            return Failure(error=AuthorizationError(...))
        return Success(value=target)

    match check(actor, target):
        case Success(value=user):
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


Result = Success[T] | Failure[E]
