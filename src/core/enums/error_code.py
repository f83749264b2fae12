"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Business failures in handlers are reported through ApplicationErrorCode;
these codes travel inside the DomainError a handler wraps.
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Authorization errors
    PERMISSION_DENIED = "permission_denied"
