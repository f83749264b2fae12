"""Closing impersonation sessions.

Shared by the handlers that end sessions for system reasons (start of a new
session, timeout, IP change, invalid session).
"""

from src.domain.entities.impersonation_audit_log import ImpersonationAuditLog
from src.domain.events.impersonation_events import ImpersonationSessionEnded
from src.domain.protocols.event_bus_protocol import EventBusProtocol
from src.domain.protocols.impersonation_audit_log_repository import (
    ImpersonationAuditLogRepository,
)


async def close_session(
    log: ImpersonationAuditLog,
    reason: str,
    *,
    audit_log_repo: ImpersonationAuditLogRepository,
    event_bus: EventBusProtocol,
) -> bool:
    """End an active log, persist it and publish ImpersonationSessionEnded.

    Returns:
        bool: False when the log had already ended (nothing persisted).
    """
    if not log.end_impersonation(reason=reason):
        return False
    await audit_log_repo.update(log)
    await event_bus.publish(
        ImpersonationSessionEnded(
            audit_log_id=log.id,
            impersonator_id=log.impersonator_id,
            impersonated_user_id=log.impersonated_user_id,
            end_reason=reason,
        )
    )
    return True
