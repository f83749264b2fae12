"""Domain errors package.

Exports all domain-level error classes for convenient importing.

Usage:
    from src.domain.errors import AuthenticationError, ImpersonationError
    from src.domain.errors import UserError
"""

from src.domain.errors.authentication_error import AuthenticationError
from src.domain.errors.impersonation_error import ImpersonationError
from src.domain.errors.user_error import UserError

__all__ = [
    "AuthenticationError",
    "ImpersonationError",
    "UserError",
]
