"""Admin role command handlers.

PromoteUserToAdmin and DemoteUserFromAdmin share one flow:
1. Emit *Attempted event
2. Load actor and target
3. Authorize promote_to_admin / demote_from_admin
4. Change the role and persist
5. Emit *Succeeded event (or *Failed on any failure)
"""

from abc import ABC, abstractmethod
from uuid import UUID

from src.application.commands.user_commands import (
    DemoteUserFromAdmin,
    PromoteUserToAdmin,
)
from src.application.dtos import UserResult
from src.application.errors import ApplicationError
from src.application.services import PolicyEnforcer
from src.core.result import Failure, Result, Success
from src.domain.entities.user import User
from src.domain.events.base_event import DomainEvent
from src.domain.events.user_events import (
    AdminRoleDemotionAttempted,
    AdminRoleDemotionFailed,
    AdminRoleDemotionSucceeded,
    AdminRolePromotionAttempted,
    AdminRolePromotionFailed,
    AdminRolePromotionSucceeded,
)
from src.domain.policies import UserPolicy
from src.domain.protocols import EventBusProtocol, LoggerProtocol, UserRepository


class _AdminRoleHandler(ABC):
    """Shared load/authorize/persist flow for role changes.

    Subclasses name the policy query and supply the role mutation and the
    Attempted/Succeeded/Failed events.
    """

    query: str

    def __init__(
        self,
        user_repo: UserRepository,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._event_bus = event_bus
        self._logger = logger
        self._enforcer = PolicyEnforcer(user_repo)

    async def _change_role(
        self, actor_id: UUID, user_id: UUID
    ) -> Result[UserResult, ApplicationError]:
        await self._event_bus.publish(self._attempted(user_id, actor_id))

        actor_result = await self._enforcer.load_actor(actor_id)
        if isinstance(actor_result, Failure):
            return await self._fail(actor_id, user_id, "actor_not_found", actor_result)
        actor = actor_result.value

        target_result = await self._enforcer.load_user(user_id)
        if isinstance(target_result, Failure):
            return await self._fail(actor_id, user_id, "user_not_found", target_result)
        user = target_result.value

        allowed = self._enforcer.authorize(actor, user, self.query, UserPolicy)
        if isinstance(allowed, Failure):
            return await self._fail(actor_id, user_id, "not_authorized", allowed)

        self._apply(user)
        await self._user_repo.update(user)

        await self._event_bus.publish(self._succeeded(user_id, actor_id))
        self._logger.info(
            "user_role_changed",
            user_id=str(user.id),
            role=user.role.value,
            changed_by=str(actor.id),
        )
        return Success(value=UserResult.from_entity(user))

    async def _fail(
        self,
        actor_id: UUID,
        user_id: UUID,
        reason: str,
        failure: Failure[ApplicationError],
    ) -> Failure[ApplicationError]:
        await self._event_bus.publish(self._failed(user_id, actor_id, reason))
        return failure

    @abstractmethod
    def _apply(self, user: User) -> None:
        """Change the role on the loaded user."""

    @abstractmethod
    def _attempted(self, user_id: UUID, actor_id: UUID) -> DomainEvent:
        """Event published before anything is loaded."""

    @abstractmethod
    def _succeeded(self, user_id: UUID, actor_id: UUID) -> DomainEvent:
        """Event published after the role change is persisted."""

    @abstractmethod
    def _failed(self, user_id: UUID, actor_id: UUID, reason: str) -> DomainEvent:
        """Event published when loading or authorization fails.

        Args:
            reason: actor_not_found, user_not_found or not_authorized.
        """


class PromoteUserToAdminHandler(_AdminRoleHandler):
    """Handler for PromoteUserToAdmin command."""

    query = "promote_to_admin"

    async def handle(
        self, cmd: PromoteUserToAdmin
    ) -> Result[UserResult, ApplicationError]:
        return await self._change_role(cmd.actor_id, cmd.user_id)

    def _apply(self, user: User) -> None:
        user.promote_to_admin()

    def _attempted(self, user_id: UUID, actor_id: UUID) -> AdminRolePromotionAttempted:
        return AdminRolePromotionAttempted(user_id=user_id, promoted_by=actor_id)

    def _succeeded(self, user_id: UUID, actor_id: UUID) -> AdminRolePromotionSucceeded:
        return AdminRolePromotionSucceeded(user_id=user_id, promoted_by=actor_id)

    def _failed(
        self, user_id: UUID, actor_id: UUID, reason: str
    ) -> AdminRolePromotionFailed:
        return AdminRolePromotionFailed(
            user_id=user_id, promoted_by=actor_id, reason=reason
        )


class DemoteUserFromAdminHandler(_AdminRoleHandler):
    """Handler for DemoteUserFromAdmin command."""

    query = "demote_from_admin"

    async def handle(
        self, cmd: DemoteUserFromAdmin
    ) -> Result[UserResult, ApplicationError]:
        return await self._change_role(cmd.actor_id, cmd.user_id)

    def _apply(self, user: User) -> None:
        user.demote_from_admin()

    def _attempted(self, user_id: UUID, actor_id: UUID) -> AdminRoleDemotionAttempted:
        return AdminRoleDemotionAttempted(user_id=user_id, demoted_by=actor_id)

    def _succeeded(self, user_id: UUID, actor_id: UUID) -> AdminRoleDemotionSucceeded:
        return AdminRoleDemotionSucceeded(user_id=user_id, demoted_by=actor_id)

    def _failed(
        self, user_id: UUID, actor_id: UUID, reason: str
    ) -> AdminRoleDemotionFailed:
        return AdminRoleDemotionFailed(
            user_id=user_id, demoted_by=actor_id, reason=reason
        )
