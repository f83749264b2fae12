"""Common error classes used across all domains and layers.

Error Types:
- AuthorizationError: Authorization failures (policy denied the query)

Usage:
    from src.core.errors import AuthorizationError
    from src.core.enums import ErrorCode
    from src.core.result import Failure

    return Failure(error=AuthorizationError(
        code=ErrorCode.PERMISSION_DENIED,
        message="Not allowed to destroy this user",
        required_permission="UserPolicy.destroy",
    ))
"""

from dataclasses import dataclass

from src.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthorizationError(DomainError):
    """Authorization failure (policy denied the query).

    Attributes:
        code: ErrorCode enum.
        message: Human-readable message.
        required_permission: Policy query that was denied, as
            "<PolicyClass>.<query>" (e.g. "ImpersonationPolicy.start").
        details: Additional context.
    """

    required_permission: str | None = None
