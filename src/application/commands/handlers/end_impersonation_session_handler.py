"""EndImpersonationSession command handler.

Closes a session for a reason detected by the system rather than requested
by the administrator. Ending an already-ended session succeeds without
changes.
"""

from src.application.commands.impersonation_commands import EndImpersonationSession
from src.application.dtos import AuditLogResult
from src.application.errors import ApplicationError, ApplicationErrorCode
from src.application.services import close_session
from src.core.result import Failure, Result, Success
from src.domain.errors import ImpersonationError
from src.domain.protocols import (
    EventBusProtocol,
    ImpersonationAuditLogRepository,
    LoggerProtocol,
)


class EndImpersonationSessionHandler:
    """Handler for EndImpersonationSession command."""

    def __init__(
        self,
        audit_log_repo: ImpersonationAuditLogRepository,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._audit_log_repo = audit_log_repo
        self._event_bus = event_bus
        self._logger = logger

    async def handle(
        self, cmd: EndImpersonationSession
    ) -> Result[AuditLogResult, ApplicationError]:
        log = await self._audit_log_repo.find_by_id(cmd.audit_log_id)
        if log is None:
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.NOT_FOUND,
                    message=ImpersonationError.INVALID_SESSION,
                    details={"audit_log_id": str(cmd.audit_log_id)},
                )
            )

        if await close_session(
            log,
            cmd.reason.value,
            audit_log_repo=self._audit_log_repo,
            event_bus=self._event_bus,
        ):
            self._logger.info(
                "impersonation_session_ended",
                audit_log_id=str(log.id),
                end_reason=cmd.reason.value,
            )

        return Success(value=AuditLogResult.from_entity(log))
