"""Core errors package.

Exports all core-level error classes for convenient importing.

Usage:
    from src.core.errors import AuthorizationError, DomainError
"""

from src.core.errors.common_errors import AuthorizationError
from src.core.errors.domain_error import DomainError

__all__ = [
    "AuthorizationError",
    "DomainError",
]
