"""Authentication handler dependency factories.

Request-scoped handler instances for sign-in.
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.core.container.events import get_event_bus
from src.core.container.infrastructure import (
    get_db_session,
    get_logger,
    get_password_service,
    get_token_service,
)

if TYPE_CHECKING:
    from src.application.commands.handlers.authenticate_user_handler import (
        AuthenticateUserHandler,
    )


async def get_authenticate_user_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "AuthenticateUserHandler":
    """Get AuthenticateUser command handler (request-scoped).

    Dependencies:
    - UserRepository (request-scoped, uses session)
    - BcryptPasswordService, JWTService, EventBus, Logger (app-scoped)

    Returns:
        AuthenticateUserHandler instance.
    """
    from src.application.commands.handlers.authenticate_user_handler import (
        AuthenticateUserHandler,
    )
    from src.infrastructure.persistence.repositories import UserRepository

    return AuthenticateUserHandler(
        user_repo=UserRepository(session=session),
        password_service=get_password_service(),
        token_service=get_token_service(),
        event_bus=get_event_bus(),
        logger=get_logger(),
        token_expires_in=settings.access_token_expire_minutes * 60,
    )
