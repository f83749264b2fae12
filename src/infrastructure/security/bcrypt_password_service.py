"""Bcrypt password hashing service (adapter).

Implements PasswordHashingProtocol using bcrypt.

Security:
    - Bcrypt with a configurable cost factor (12 in production)
    - Random salt per hash
    - Constant-time verification
"""

import bcrypt


class BcryptPasswordService:
    """Bcrypt password hashing service.

    Usage:
        password_service: PasswordHashingProtocol = get_password_service()

        password_hash = password_service.hash_password("s3cret-pass")
        is_valid = password_service.verify_password("s3cret-pass", password_hash)
    """

    def __init__(self, cost_factor: int = 12) -> None:
        """Initialize bcrypt password service.

        Args:
            cost_factor: Bcrypt cost factor, 4 to 20. Each +1 doubles the
                hashing time; tests use 4.

        Raises:
            ValueError: If cost_factor is outside 4..20.
        """
        if cost_factor < 4:
            msg = "Cost factor must be at least 4 (bcrypt minimum)"
            raise ValueError(msg)
        if cost_factor > 20:
            msg = "Cost factor above 20 is impractically slow"
            raise ValueError(msg)

        self._cost_factor = cost_factor

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password.

        Returns:
            Hashed password string (bcrypt format: $2b$<cost>$...).
        """
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a bcrypt hash.

        Returns:
            True if password matches hash. False for a mismatch or a value
            that is not a bcrypt hash.
        """
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except (ValueError, AttributeError):
            return False
