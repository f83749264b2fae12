"""User roles for record-level authorization.

Policies only distinguish two roles. A system administrator may manage every
user record and may impersonate non-administrators; everybody else is limited
to their own record.

Usage:
    from src.domain.enums import UserRole

    if user.role == UserRole.SYSTEM_ADMIN:
        # Admin-only logic
"""

from enum import Enum


class UserRole(str, Enum):
    """User roles.

    String Enum:
        Inherits from str for easy serialization into JWT claims and
        database columns. Values are lowercase snake_case.
    """

    DEFAULT = "default"
    """Regular account with access to its own record only."""

    SYSTEM_ADMIN = "system_admin"
    """Administrator with access to every user record and to impersonation."""

    @property
    def label(self) -> str:
        """Humanized role name ("Default", "System admin")."""
        return self.value.replace("_", " ").capitalize()

    @classmethod
    def values(cls) -> list[str]:
        """Get all role values as strings.

        Returns:
            list[str]: List of role values ['default', 'system_admin'].
        """
        return [role.value for role in cls]

    @classmethod
    def is_valid(cls, value: str) -> bool:
        """Check if a string is a valid role.

        Args:
            value: String to check.

        Returns:
            bool: True if value is a valid role.
        """
        return value in cls.values()
