"""StopImpersonation command handler.

Flow:
1. Emit ImpersonationStopAttempted event
2. Load the impersonator and authorize ImpersonationPolicy.stop
3. Load the audit log named in the token (must belong to the impersonator)
4. Reject a log that already ended (UNAUTHORIZED, no token)
5. Reject a request from another address: the log ends with ip_change
6. End the log (reason: manual unless given)
7. Issue a fresh access token for the impersonator
8. Emit ImpersonationStopSucceeded event
9. Return Success(ImpersonationStopped)
"""

from src.application.commands.impersonation_commands import StopImpersonation
from src.application.dtos import AuditLogResult, ImpersonationStopped, UserResult
from src.application.errors import ApplicationError, ApplicationErrorCode
from src.application.services import (
    PolicyEnforcer,
    close_session,
    validation_failed,
)
from src.core.result import Failure, Result, Success
from src.domain.enums.impersonation_action import ImpersonationEndReason
from src.domain.errors import ImpersonationError
from src.domain.events.impersonation_events import (
    ImpersonationStopAttempted,
    ImpersonationStopFailed,
    ImpersonationStopSucceeded,
)
from src.domain.policies import ImpersonationPolicy
from src.domain.protocols import (
    EventBusProtocol,
    ImpersonationAuditLogRepository,
    LoggerProtocol,
    TokenGenerationProtocol,
    UserRepository,
)


class StopImpersonationHandler:
    """Handler for StopImpersonation command."""

    def __init__(
        self,
        user_repo: UserRepository,
        audit_log_repo: ImpersonationAuditLogRepository,
        token_service: TokenGenerationProtocol,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
        token_expires_in: int,
    ) -> None:
        self._user_repo = user_repo
        self._audit_log_repo = audit_log_repo
        self._token_service = token_service
        self._event_bus = event_bus
        self._logger = logger
        self._token_expires_in = token_expires_in
        self._enforcer = PolicyEnforcer(user_repo)

    async def handle(
        self, cmd: StopImpersonation
    ) -> Result[ImpersonationStopped, ApplicationError]:
        """Handle StopImpersonation command.

        Returns:
            Success(ImpersonationStopped): Session ended, administrator token issued.
            Failure(ApplicationError): UNAUTHORIZED (also when the session
            already ended or the address changed), FORBIDDEN or
            COMMAND_VALIDATION_FAILED when no impersonation is in progress.
        """
        await self._event_bus.publish(
            ImpersonationStopAttempted(
                impersonator_id=cmd.impersonator_id,
                audit_log_id=cmd.audit_log_id,
            )
        )

        actor_result = await self._enforcer.load_actor(cmd.impersonator_id)
        if isinstance(actor_result, Failure):
            return await self._fail(cmd, "impersonator_not_found", actor_result)
        actor = actor_result.value

        stop_result = self._enforcer.authorize(actor, None, "stop", ImpersonationPolicy)
        if isinstance(stop_result, Failure):
            return await self._fail(cmd, "not_authorized", stop_result)

        log = None
        if cmd.audit_log_id is not None:
            log = await self._audit_log_repo.find_by_id(cmd.audit_log_id)
        if log is None or log.impersonator_id != actor.id:
            failure = validation_failed(ImpersonationError.NOT_IMPERSONATING)
            return await self._fail(cmd, "not_impersonating", failure)

        if not log.is_active():
            failure = _unauthorized(
                ImpersonationError.INVALID_SESSION,
                ImpersonationEndReason.INVALID_SESSION,
            )
            return await self._fail(cmd, "session_ended", failure)

        if cmd.request_ip != log.ip_address:
            await close_session(
                log,
                ImpersonationEndReason.IP_CHANGE.value,
                audit_log_repo=self._audit_log_repo,
                event_bus=self._event_bus,
            )
            self._logger.warning(
                "impersonation_stop_rejected",
                audit_log_id=str(log.id),
                impersonator_id=str(actor.id),
                end_reason=ImpersonationEndReason.IP_CHANGE.value,
            )
            failure = _unauthorized(
                ImpersonationError.IP_CHANGED, ImpersonationEndReason.IP_CHANGE
            )
            return await self._fail(cmd, "ip_change", failure)

        log.end_impersonation(reason=cmd.reason)
        await self._audit_log_repo.update(log)

        token = self._token_service.generate_access_token(
            user_id=actor.id,
            email=actor.email,
            roles=[actor.role.value],
        )

        await self._event_bus.publish(
            ImpersonationStopSucceeded(
                impersonator_id=actor.id,
                impersonated_user_id=log.impersonated_user_id,
                audit_log_id=log.id,
                duration_seconds=log.duration(),
            )
        )

        return Success(
            value=ImpersonationStopped(
                access_token=token,
                expires_in=self._token_expires_in,
                audit_log=AuditLogResult.from_entity(log),
                impersonator=UserResult.from_entity(actor),
            )
        )

    async def _fail(
        self,
        cmd: StopImpersonation,
        reason: str,
        failure: Failure[ApplicationError],
    ) -> Failure[ApplicationError]:
        await self._event_bus.publish(
            ImpersonationStopFailed(
                impersonator_id=cmd.impersonator_id,
                reason=reason,
                audit_log_id=cmd.audit_log_id,
            )
        )
        return failure


def _unauthorized(
    message: str, reason: ImpersonationEndReason
) -> Failure[ApplicationError]:
    return Failure(
        error=ApplicationError(
            code=ApplicationErrorCode.UNAUTHORIZED,
            message=message,
            details={"end_reason": reason.value},
        )
    )
