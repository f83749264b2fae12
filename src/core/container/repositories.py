"""Repository dependency factories.

Request-scoped repository instances. Each request gets fresh repositories
sharing the request's session.
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.container.infrastructure import get_db_session

if TYPE_CHECKING:
    from src.infrastructure.persistence.repositories import (
        ImpersonationAuditLogRepository,
        UserRepository,
    )


# ============================================================================
# Repository Factories (Request-Scoped)
# ============================================================================


async def get_user_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "UserRepository":
    """Get user repository (request-scoped).

    Args:
        session: Database session for request duration.

    Returns:
        UserRepository instance.
    """
    from src.infrastructure.persistence.repositories import UserRepository

    return UserRepository(session=session)


async def get_impersonation_audit_log_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "ImpersonationAuditLogRepository":
    """Get impersonation audit log repository (request-scoped)."""
    from src.infrastructure.persistence.repositories import (
        ImpersonationAuditLogRepository,
    )

    return ImpersonationAuditLogRepository(session=session)
