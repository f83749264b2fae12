"""UserRepository - SQLAlchemy implementation of UserRepository protocol.

Adapter for hexagonal architecture.
Maps between domain User entities and database UserModel, and translates
policy ScopeFilters into WHERE clauses.
"""

from uuid import UUID

from sqlalchemy import ColumnElement, Select, false, func, or_, select, true
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.user import User
from src.domain.enums.user_role import UserRole
from src.domain.enums.user_sort import UserSort
from src.domain.policies.scope import ScopeFilter, ScopeKind
from src.infrastructure.persistence.base import ensure_utc
from src.infrastructure.persistence.models.user import User as UserModel


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so search terms match literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class UserRepository:
    """SQLAlchemy implementation of UserRepository protocol.

    This class does NOT inherit from UserRepository protocol (Protocol uses
    structural typing).

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = UserRepository(session)
        ...     user = await repo.find_by_email("user@example.com")
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find user by ID.

        Args:
            user_id: User's unique identifier.

        Returns:
            Domain User entity if found, None otherwise.
        """
        stmt = select(UserModel).where(UserModel.id == user_id)
        result = await self.session.execute(stmt)
        user_model = result.scalar_one_or_none()

        if user_model is None:
            return None

        return self._to_domain(user_model)

    async def find_by_email(self, email: str) -> User | None:
        """Find user by email address (case-insensitive).

        Args:
            email: User's email address.

        Returns:
            Domain User entity if found, None otherwise.
        """
        stmt = select(UserModel).where(func.lower(UserModel.email) == email.lower())
        result = await self.session.execute(stmt)
        user_model = result.scalar_one_or_none()

        if user_model is None:
            return None

        return self._to_domain(user_model)

    async def exists_by_email(self, email: str) -> bool:
        """Check if a user with this email exists (active or not)."""
        stmt = select(UserModel.id).where(func.lower(UserModel.email) == email.lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def save(self, user: User) -> None:
        """Create new user in database.

        Raises:
            IntegrityError: If email already exists.
        """
        self.session.add(self._to_model(user))
        await self.session.commit()

    async def update(self, user: User) -> None:
        """Update existing user in database.

        Raises:
            NoResultFound: If user doesn't exist.
        """
        stmt = select(UserModel).where(UserModel.id == user.id)
        result = await self.session.execute(stmt)
        user_model = result.scalar_one()

        user_model.email = user.email
        user_model.password_hash = user.password_hash
        user_model.first_name = user.first_name
        user_model.last_name = user.last_name
        user_model.role = user.role.value
        user_model.is_active = user.is_active
        user_model.updated_at = user.updated_at

        await self.session.commit()

    async def delete(self, user_id: UUID) -> None:
        """Delete user (soft delete - sets is_active=False).

        Raises:
            NoResultFound: If user doesn't exist.
        """
        stmt = select(UserModel).where(UserModel.id == user_id)
        result = await self.session.execute(stmt)
        user_model = result.scalar_one()

        user_model.is_active = False

        await self.session.commit()

    async def list_users(
        self,
        *,
        scope: ScopeFilter,
        search: str | None = None,
        sort: UserSort = UserSort.CREATED,
        limit: int = 20,
        offset: int = 0,
    ) -> list[User]:
        """List active users visible through ``scope``.

        Args:
            scope: Resolved UserPolicy scope.
            search: Case-insensitive match on email, first or last name.
            sort: Sort order.
            limit: Page size.
            offset: Rows to skip.

        Returns:
            Users in the requested order.
        """
        stmt = self._filtered(select(UserModel), scope, search)
        stmt = stmt.order_by(*self._ordering(sort)).limit(limit).offset(offset)
        result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def count_users(
        self,
        *,
        scope: ScopeFilter,
        search: str | None = None,
    ) -> int:
        """Count active users matching the same filters as list_users."""
        stmt = self._filtered(
            select(func.count()).select_from(UserModel), scope, search
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    def _filtered(
        self, stmt: Select, scope: ScopeFilter, search: str | None
    ) -> Select:
        stmt = stmt.where(UserModel.is_active.is_(True), self._scope_clause(scope))
        if search:
            pattern = f"%{escape_like(search)}%"
            stmt = stmt.where(
                or_(
                    UserModel.email.ilike(pattern, escape="\\"),
                    UserModel.first_name.ilike(pattern, escape="\\"),
                    UserModel.last_name.ilike(pattern, escape="\\"),
                )
            )
        return stmt

    @staticmethod
    def _scope_clause(scope: ScopeFilter) -> ColumnElement[bool]:
        match scope.kind:
            case ScopeKind.ALL:
                return true()
            case ScopeKind.BY_ID | ScopeKind.BY_OWNER:
                # A user "owns" only their own row.
                return UserModel.id == scope.value
            case _:
                return false()

    @staticmethod
    def _ordering(sort: UserSort) -> tuple[ColumnElement, ...]:
        match sort:
            case UserSort.NAME:
                return (
                    func.coalesce(UserModel.last_name, "").asc(),
                    func.coalesce(UserModel.first_name, "").asc(),
                    UserModel.email.asc(),
                )
            case UserSort.EMAIL:
                return (UserModel.email.asc(),)
            case _:
                return (UserModel.created_at.desc(), UserModel.id.desc())

    def _to_domain(self, user_model: UserModel) -> User:
        """Convert database model to domain entity."""
        return User(
            id=user_model.id,
            email=user_model.email,
            password_hash=user_model.password_hash,
            first_name=user_model.first_name,
            last_name=user_model.last_name,
            role=UserRole(user_model.role),
            is_active=user_model.is_active,
            created_at=ensure_utc(user_model.created_at),
            updated_at=ensure_utc(user_model.updated_at),
        )

    def _to_model(self, user: User) -> UserModel:
        """Convert domain entity to database model."""
        return UserModel(
            id=user.id,
            email=user.email,
            password_hash=user.password_hash,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role.value,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
