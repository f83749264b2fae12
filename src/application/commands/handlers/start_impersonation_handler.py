"""StartImpersonation command handler.

Flow:
1. Emit ImpersonationStartAttempted event
2. Load impersonator (UNAUTHORIZED if missing)
3. Require admin access
4. Load target user (NOT_FOUND "User not found")
5. Authorize ImpersonationPolicy.start (FORBIDDEN)
6. End the administrator's current session and every active session on
   the target (reason: new_session_started)
7. Create and save the start audit log
8. Issue an impersonation access token for the target
9. Emit ImpersonationStartSucceeded event
10. Return Success(ImpersonationSession)

On failure:
- Emit ImpersonationStartFailed event
- Return Failure(ApplicationError)
"""

from src.application.commands.impersonation_commands import StartImpersonation
from src.application.dtos import AuditLogResult, ImpersonationSession, UserResult
from src.application.errors import ApplicationError
from src.application.services import PolicyEnforcer, close_session, validation_failed
from src.core.result import Failure, Result, Success
from src.domain.entities.impersonation_audit_log import ImpersonationAuditLog
from src.domain.enums.impersonation_action import ImpersonationEndReason
from src.domain.errors import ImpersonationError
from src.domain.events.impersonation_events import (
    ImpersonationStartAttempted,
    ImpersonationStartFailed,
    ImpersonationStartSucceeded,
)
from src.domain.policies import ImpersonationPolicy
from src.domain.protocols import (
    EventBusProtocol,
    ImpersonationAuditLogRepository,
    LoggerProtocol,
    TokenGenerationProtocol,
    UserRepository,
)
from src.domain.value_objects import ImpersonationClaims


class StartImpersonationHandler:
    """Handler for StartImpersonation command.

    Dependencies (injected via constructor):
        - UserRepository: impersonator and target lookup
        - ImpersonationAuditLogRepository: audit trail
        - TokenGenerationProtocol: impersonation token
        - EventBusProtocol: domain events
        - LoggerProtocol: structured logging
    """

    def __init__(
        self,
        user_repo: UserRepository,
        audit_log_repo: ImpersonationAuditLogRepository,
        token_service: TokenGenerationProtocol,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
        token_expires_in: int,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            user_repo: User repository.
            audit_log_repo: Audit log repository.
            token_service: JWT service.
            event_bus: Event bus.
            logger: Logger.
            token_expires_in: Impersonation token lifetime in seconds.
        """
        self._user_repo = user_repo
        self._audit_log_repo = audit_log_repo
        self._token_service = token_service
        self._event_bus = event_bus
        self._logger = logger
        self._token_expires_in = token_expires_in
        self._enforcer = PolicyEnforcer(user_repo)

    async def handle(
        self, cmd: StartImpersonation
    ) -> Result[ImpersonationSession, ApplicationError]:
        """Handle StartImpersonation command.

        Args:
            cmd: StartImpersonation command.

        Returns:
            Success(ImpersonationSession): Session started.
            Failure(ApplicationError): UNAUTHORIZED, FORBIDDEN, NOT_FOUND or
            COMMAND_VALIDATION_FAILED.
        """
        await self._event_bus.publish(
            ImpersonationStartAttempted(
                impersonator_id=cmd.impersonator_id,
                target_user_id=cmd.user_id,
                ip_address=cmd.ip_address,
            )
        )

        actor_result = await self._enforcer.load_actor(cmd.impersonator_id)
        if isinstance(actor_result, Failure):
            return await self._fail(cmd, "impersonator_not_found", actor_result)
        actor = actor_result.value

        admin_result = self._enforcer.authorize(
            actor, None, "admin_access", ImpersonationPolicy
        )
        if isinstance(admin_result, Failure):
            return await self._fail(cmd, "not_authorized", admin_result)

        target_result = await self._enforcer.load_user(
            cmd.user_id, message=ImpersonationError.USER_NOT_FOUND
        )
        if isinstance(target_result, Failure):
            return await self._fail(cmd, "user_not_found", target_result)
        target = target_result.value

        start_result = self._enforcer.authorize(
            actor, target, "start", ImpersonationPolicy
        )
        if isinstance(start_result, Failure):
            return await self._fail(cmd, "not_authorized", start_result)

        await self._end_existing_sessions(cmd)

        log_result = ImpersonationAuditLog.create_start(
            impersonator_id=actor.id,
            impersonated_user_id=target.id,
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
            session_id=cmd.session_id,
            reason=cmd.reason,
        )
        if isinstance(log_result, Failure):
            failure = validation_failed(log_result.error)
            return await self._fail(cmd, "invalid_request", failure)
        log = log_result.value
        await self._audit_log_repo.save(log)

        token = self._token_service.generate_access_token(
            user_id=target.id,
            email=target.email,
            roles=[target.role.value],
            impersonation=ImpersonationClaims(
                impersonator_id=actor.id,
                audit_log_id=log.id,
                ip_address=log.ip_address,
                started_at=log.started_at,
            ),
        )

        await self._event_bus.publish(
            ImpersonationStartSucceeded(
                impersonator_id=actor.id,
                target_user_id=target.id,
                audit_log_id=log.id,
                reason=cmd.reason,
            )
        )

        return Success(
            value=ImpersonationSession(
                access_token=token,
                expires_in=self._token_expires_in,
                audit_log=AuditLogResult.from_entity(log),
                impersonated_user=UserResult.from_entity(target),
                impersonator=UserResult.from_entity(actor),
            )
        )

    async def _end_existing_sessions(self, cmd: StartImpersonation) -> None:
        """End sessions that the new one replaces."""
        reason = ImpersonationEndReason.NEW_SESSION_STARTED.value
        stale = await self._audit_log_repo.find_active_for_user(cmd.user_id)

        if cmd.current_audit_log_id is not None:
            current = await self._audit_log_repo.find_by_id(cmd.current_audit_log_id)
            if (
                current is not None
                and current.impersonator_id == cmd.impersonator_id
                and all(log.id != current.id for log in stale)
            ):
                stale.append(current)

        for log in stale:
            if await close_session(
                log,
                reason,
                audit_log_repo=self._audit_log_repo,
                event_bus=self._event_bus,
            ):
                self._logger.info(
                    "impersonation_session_replaced",
                    audit_log_id=str(log.id),
                    impersonated_user_id=str(log.impersonated_user_id),
                )

    async def _fail(
        self,
        cmd: StartImpersonation,
        reason: str,
        failure: Failure[ApplicationError],
    ) -> Failure[ApplicationError]:
        """Publish ImpersonationStartFailed and pass the failure through."""
        await self._event_bus.publish(
            ImpersonationStartFailed(
                impersonator_id=cmd.impersonator_id,
                target_user_id=cmd.user_id,
                reason=reason,
            )
        )
        return failure
