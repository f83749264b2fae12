"""Password hashing protocol for domain layer.

Infrastructure layer provides the concrete implementation (bcrypt).
"""

from typing import Protocol


class PasswordHashingProtocol(Protocol):
    """Password hashing and verification interface.

    Usage:
        password_hash = self.password_service.hash_password("s3cret-pass")
        is_valid = self.password_service.verify_password("s3cret-pass", password_hash)
    """

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password.

        Returns:
            Hashed password string (bcrypt format: $2b$12$...).
        """
        ...

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a hash.

        Returns:
            True if password matches hash, False otherwise (including a
            malformed hash).
        """
        ...
