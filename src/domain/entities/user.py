"""User domain entity.

Pure business logic, no framework dependencies.

Identity:
    Two User instances are equal when they share the same id. Policies rely
    on this to answer "is the actor the same user as the target".

Roles:
    - role: UserRole (DEFAULT or SYSTEM_ADMIN)
    - system_admin: True for administrators; the only attribute policies read
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from src.domain.enums.user_role import UserRole


@dataclass(eq=False)
class User:
    """User domain entity with naming and role business rules.

    Attributes:
        id: Unique user identifier (UUID v7).
        email: User email address (stored lowercase).
        password_hash: Bcrypt hashed password (never plaintext).
        first_name: Optional given name.
        last_name: Optional family name.
        role: Authorization role.
        is_active: Soft delete flag (deleted users cannot sign in).
        created_at: Timestamp when user was created.
        updated_at: Timestamp when user was last updated.

    Example:
        >>> user = User(id=uuid7(), email="ada@example.com", password_hash="$2b$12$...")
        >>> user.system_admin
        False
        >>> user.promote_to_admin()
        >>> user.role_name()
        'System admin'
    """

    id: UUID
    email: str
    password_hash: str
    first_name: str | None = None
    last_name: str | None = None
    role: UserRole = UserRole.DEFAULT
    is_active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def system_admin(self) -> bool:
        """Whether the user holds the system administrator role."""
        return self.role == UserRole.SYSTEM_ADMIN

    def is_admin(self) -> bool:
        """Alias of system_admin."""
        return self.system_admin

    def full_name(self) -> str | None:
        """Return first and last name joined by a space.

        Returns:
            str | None: The stripped full name, or None when both names are blank.
        """
        first = (self.first_name or "").strip()
        last = (self.last_name or "").strip()
        if not first and not last:
            return None
        return f"{first} {last}".strip()

    def display_name(self) -> str:
        """Return the full name, falling back to the email address."""
        return self.full_name() or self.email

    def initials(self) -> str:
        """Return up to two upper-case initials for avatars.

        Rules:
            - Both names present: first letter of each.
            - Only a first name: its first two letters.
            - Otherwise: first two letters of the email, or "U".

        Example:
            >>> User(..., first_name="ada", last_name="lovelace").initials()
            'AL'
            >>> User(..., email="grace@example.com").initials()
            'GR'
        """
        first = (self.first_name or "").strip()
        last = (self.last_name or "").strip()
        if first and last:
            return f"{first[0]}{last[0]}".upper()
        if first:
            return first[:2].upper()
        if self.email:
            return self.email[:2].upper()
        return "U"

    def role_name(self) -> str:
        """Return the humanized role ("Default", "System admin")."""
        return self.role.label

    def promote_to_admin(self) -> None:
        """Grant the system administrator role.

        Side Effects:
            - Sets role to SYSTEM_ADMIN
            - Updates updated_at timestamp
        """
        self.role = UserRole.SYSTEM_ADMIN
        self.updated_at = datetime.now(UTC)

    def demote_from_admin(self) -> None:
        """Revoke the system administrator role.

        Side Effects:
            - Sets role to DEFAULT
            - Updates updated_at timestamp
        """
        self.role = UserRole.DEFAULT
        self.updated_at = datetime.now(UTC)

    def deactivate(self) -> None:
        """Soft delete the account."""
        self.is_active = False
        self.updated_at = datetime.now(UTC)
