"""Impersonation handler dependency factories.

Request-scoped handler instances for:
- Starting and stopping impersonation
- Validating the session behind an impersonation token
- Ending sessions for system reasons
- Listing audit logs
"""

from datetime import timedelta
from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.core.container.events import get_event_bus
from src.core.container.infrastructure import (
    get_db_session,
    get_logger,
    get_token_service,
)

if TYPE_CHECKING:
    from src.application.commands.handlers.end_impersonation_session_handler import (
        EndImpersonationSessionHandler,
    )
    from src.application.commands.handlers.start_impersonation_handler import (
        StartImpersonationHandler,
    )
    from src.application.commands.handlers.stop_impersonation_handler import (
        StopImpersonationHandler,
    )
    from src.application.queries.handlers.list_impersonation_audit_logs_handler import (
        ListImpersonationAuditLogsHandler,
    )
    from src.application.queries.handlers.validate_impersonation_session_handler import (
        ValidateImpersonationSessionHandler,
    )


async def get_start_impersonation_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "StartImpersonationHandler":
    """Get StartImpersonation command handler (request-scoped).

    Dependencies:
    - UserRepository, ImpersonationAuditLogRepository (request-scoped)
    - JWTService, EventBus, Logger (app-scoped singletons)
    """
    from src.application.commands.handlers.start_impersonation_handler import (
        StartImpersonationHandler,
    )
    from src.infrastructure.persistence.repositories import (
        ImpersonationAuditLogRepository,
        UserRepository,
    )

    return StartImpersonationHandler(
        user_repo=UserRepository(session=session),
        audit_log_repo=ImpersonationAuditLogRepository(session=session),
        token_service=get_token_service(),
        event_bus=get_event_bus(),
        logger=get_logger(),
        token_expires_in=settings.impersonation_token_expire_minutes * 60,
    )


async def get_stop_impersonation_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "StopImpersonationHandler":
    """Get StopImpersonation command handler (request-scoped)."""
    from src.application.commands.handlers.stop_impersonation_handler import (
        StopImpersonationHandler,
    )
    from src.infrastructure.persistence.repositories import (
        ImpersonationAuditLogRepository,
        UserRepository,
    )

    return StopImpersonationHandler(
        user_repo=UserRepository(session=session),
        audit_log_repo=ImpersonationAuditLogRepository(session=session),
        token_service=get_token_service(),
        event_bus=get_event_bus(),
        logger=get_logger(),
        token_expires_in=settings.access_token_expire_minutes * 60,
    )


async def get_end_impersonation_session_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "EndImpersonationSessionHandler":
    """Get EndImpersonationSession command handler (request-scoped)."""
    from src.application.commands.handlers.end_impersonation_session_handler import (
        EndImpersonationSessionHandler,
    )
    from src.infrastructure.persistence.repositories import (
        ImpersonationAuditLogRepository,
    )

    return EndImpersonationSessionHandler(
        audit_log_repo=ImpersonationAuditLogRepository(session=session),
        event_bus=get_event_bus(),
        logger=get_logger(),
    )


async def get_validate_impersonation_session_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ValidateImpersonationSessionHandler":
    """Get ValidateImpersonationSession query handler (request-scoped).

    The timeout comes from settings.impersonation_timeout_hours.
    """
    from src.application.queries.handlers.validate_impersonation_session_handler import (
        ValidateImpersonationSessionHandler,
    )
    from src.infrastructure.persistence.repositories import (
        ImpersonationAuditLogRepository,
    )

    return ValidateImpersonationSessionHandler(
        audit_log_repo=ImpersonationAuditLogRepository(session=session),
        event_bus=get_event_bus(),
        logger=get_logger(),
        timeout=timedelta(hours=settings.impersonation_timeout_hours),
    )


async def get_list_impersonation_audit_logs_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ListImpersonationAuditLogsHandler":
    """Get ListImpersonationAuditLogs query handler (request-scoped)."""
    from src.application.queries.handlers.list_impersonation_audit_logs_handler import (
        ListImpersonationAuditLogsHandler,
    )
    from src.infrastructure.persistence.repositories import (
        ImpersonationAuditLogRepository,
        UserRepository,
    )

    return ListImpersonationAuditLogsHandler(
        user_repo=UserRepository(session=session),
        audit_log_repo=ImpersonationAuditLogRepository(session=session),
    )
