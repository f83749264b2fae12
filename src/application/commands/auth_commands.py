"""Authentication commands (CQRS write operations).

Commands represent user intent to change system state.
All commands are immutable (frozen=True) and use keyword-only arguments (kw_only=True).
"""

from dataclasses import dataclass

from src.domain.types import Email


@dataclass(frozen=True, kw_only=True)
class AuthenticateUser:
    """Sign in with email and password.

    Attributes:
        email: User's email address (normalized).
        password: Plaintext password, verified against the stored hash.

    Example:
        >>> command = AuthenticateUser(email="ada@example.com", password="s3cret-pass")
        >>> result = await handler.handle(command)
        >>> # Success(AccessTokenResult) or Failure(ApplicationError)
    """

    email: Email
    password: str
