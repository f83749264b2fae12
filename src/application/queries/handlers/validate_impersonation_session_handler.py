"""ValidateImpersonationSession query handler.

Runs on every request made with an impersonation token. Checks, in order:
1. The audit log exists, is active and matches the token: both users, the
   start time and the recorded address (invalid_session)
2. The session is younger than the timeout (timeout)
3. The request comes from the recorded IP address (ip_change)

A failed check ends the session with that reason, publishes
ImpersonationSessionEnded, and returns UNAUTHORIZED. Unlike other queries
this one writes, because a stale session must not survive the request that
discovered it.
"""

from datetime import UTC, datetime, timedelta

from src.application.dtos import AuditLogResult
from src.application.errors import ApplicationError, ApplicationErrorCode
from src.application.queries.impersonation_queries import ValidateImpersonationSession
from src.application.services import close_session
from src.core.result import Failure, Result, Success
from src.domain.entities.impersonation_audit_log import ImpersonationAuditLog
from src.domain.enums.impersonation_action import ImpersonationEndReason
from src.domain.errors import ImpersonationError
from src.domain.protocols import (
    EventBusProtocol,
    ImpersonationAuditLogRepository,
    LoggerProtocol,
)

_MESSAGES = {
    ImpersonationEndReason.INVALID_SESSION: ImpersonationError.INVALID_SESSION,
    ImpersonationEndReason.TIMEOUT: ImpersonationError.SESSION_TIMED_OUT,
    ImpersonationEndReason.IP_CHANGE: ImpersonationError.IP_CHANGED,
}


class ValidateImpersonationSessionHandler:
    """Handler for ValidateImpersonationSession query.

    Dependencies (injected via constructor):
        - ImpersonationAuditLogRepository: For the session's log
        - EventBusProtocol: For ImpersonationSessionEnded
        - LoggerProtocol: For structured logging
        - timeout: Maximum session age
    """

    def __init__(
        self,
        audit_log_repo: ImpersonationAuditLogRepository,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
        timeout: timedelta,
    ) -> None:
        self._audit_log_repo = audit_log_repo
        self._event_bus = event_bus
        self._logger = logger
        self._timeout = timeout

    async def handle(
        self, query: ValidateImpersonationSession
    ) -> Result[AuditLogResult, ApplicationError]:
        """Handle ValidateImpersonationSession query.

        Returns:
            Success(AuditLogResult): Session is live.
            Failure(ApplicationError): UNAUTHORIZED, session has been ended.
        """
        log = await self._audit_log_repo.find_by_id(query.audit_log_id)

        if (
            log is None
            or not log.is_active()
            or log.impersonator_id != query.impersonator_id
            or log.impersonated_user_id != query.impersonated_user_id
            or not _same_second(log.started_at, query.started_at)
            or log.ip_address != query.ip_address
        ):
            return await self._reject(query, log, ImpersonationEndReason.INVALID_SESSION)

        if datetime.now(UTC) - log.started_at > self._timeout:
            return await self._reject(query, log, ImpersonationEndReason.TIMEOUT)

        if query.request_ip != log.ip_address:
            return await self._reject(query, log, ImpersonationEndReason.IP_CHANGE)

        return Success(value=AuditLogResult.from_entity(log))

    async def _reject(
        self,
        query: ValidateImpersonationSession,
        log: ImpersonationAuditLog | None,
        reason: ImpersonationEndReason,
    ) -> Failure[ApplicationError]:
        if log is not None:
            await close_session(
                log,
                reason.value,
                audit_log_repo=self._audit_log_repo,
                event_bus=self._event_bus,
            )

        self._logger.warning(
            "impersonation_session_rejected",
            audit_log_id=str(query.audit_log_id),
            impersonator_id=str(query.impersonator_id),
            end_reason=reason.value,
            request_ip=query.request_ip,
        )
        return Failure(
            error=ApplicationError(
                code=ApplicationErrorCode.UNAUTHORIZED,
                message=_MESSAGES[reason],
                details={"end_reason": reason.value},
            )
        )


def _same_second(recorded: datetime, claimed: datetime) -> bool:
    # Tokens carry the start time as a whole unix timestamp.
    return int(recorded.timestamp()) == int(claimed.timestamp())
