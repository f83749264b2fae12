"""User management handler dependency factories.

Request-scoped handler instances for:
- Listing and reading users
- Creating, updating and soft deleting users
- Promoting and demoting administrators
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.container.events import get_event_bus
from src.core.container.infrastructure import (
    get_db_session,
    get_logger,
    get_password_service,
)

if TYPE_CHECKING:
    from src.application.commands.handlers.change_admin_role_handlers import (
        DemoteUserFromAdminHandler,
        PromoteUserToAdminHandler,
    )
    from src.application.commands.handlers.create_user_handler import (
        CreateUserHandler,
    )
    from src.application.commands.handlers.delete_user_handler import (
        DeleteUserHandler,
    )
    from src.application.commands.handlers.update_user_handler import (
        UpdateUserHandler,
    )
    from src.application.queries.handlers.user_query_handlers import (
        GetUserHandler,
        ListUsersHandler,
    )


# ============================================================================
# Query Handler Factories
# ============================================================================


async def get_list_users_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ListUsersHandler":
    """Get ListUsers query handler (request-scoped)."""
    from src.application.queries.handlers.user_query_handlers import (
        ListUsersHandler,
    )
    from src.infrastructure.persistence.repositories import UserRepository

    return ListUsersHandler(user_repo=UserRepository(session=session))


async def get_get_user_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "GetUserHandler":
    """Get GetUser query handler (request-scoped)."""
    from src.application.queries.handlers.user_query_handlers import GetUserHandler
    from src.infrastructure.persistence.repositories import UserRepository

    return GetUserHandler(user_repo=UserRepository(session=session))


# ============================================================================
# Command Handler Factories
# ============================================================================


async def get_create_user_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "CreateUserHandler":
    """Get CreateUser command handler (request-scoped).

    Dependencies:
    - UserRepository (request-scoped, uses session)
    - BcryptPasswordService (app-scoped singleton)
    - EventBus, Logger (app-scoped singletons)
    """
    from src.application.commands.handlers.create_user_handler import (
        CreateUserHandler,
    )
    from src.infrastructure.persistence.repositories import UserRepository

    return CreateUserHandler(
        user_repo=UserRepository(session=session),
        password_service=get_password_service(),
        event_bus=get_event_bus(),
        logger=get_logger(),
    )


async def get_update_user_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "UpdateUserHandler":
    """Get UpdateUser command handler (request-scoped)."""
    from src.application.commands.handlers.update_user_handler import (
        UpdateUserHandler,
    )
    from src.infrastructure.persistence.repositories import UserRepository

    return UpdateUserHandler(
        user_repo=UserRepository(session=session),
        password_service=get_password_service(),
        event_bus=get_event_bus(),
        logger=get_logger(),
    )


async def get_delete_user_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "DeleteUserHandler":
    """Get DeleteUser command handler (request-scoped)."""
    from src.application.commands.handlers.delete_user_handler import (
        DeleteUserHandler,
    )
    from src.infrastructure.persistence.repositories import UserRepository

    return DeleteUserHandler(
        user_repo=UserRepository(session=session),
        event_bus=get_event_bus(),
        logger=get_logger(),
    )


async def get_promote_user_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "PromoteUserToAdminHandler":
    """Get PromoteUserToAdmin command handler (request-scoped)."""
    from src.application.commands.handlers.change_admin_role_handlers import (
        PromoteUserToAdminHandler,
    )
    from src.infrastructure.persistence.repositories import UserRepository

    return PromoteUserToAdminHandler(
        user_repo=UserRepository(session=session),
        event_bus=get_event_bus(),
        logger=get_logger(),
    )


async def get_demote_user_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "DemoteUserFromAdminHandler":
    """Get DemoteUserFromAdmin command handler (request-scoped)."""
    from src.application.commands.handlers.change_admin_role_handlers import (
        DemoteUserFromAdminHandler,
    )
    from src.infrastructure.persistence.repositories import UserRepository

    return DemoteUserFromAdminHandler(
        user_repo=UserRepository(session=session),
        event_bus=get_event_bus(),
        logger=get_logger(),
    )
