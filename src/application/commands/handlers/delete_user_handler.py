"""DeleteUser command handler (soft delete)."""

from src.application.commands.user_commands import DeleteUser
from src.application.errors import ApplicationError
from src.application.services import PolicyEnforcer
from src.core.result import Failure, Result, Success
from src.domain.events.user_events import UserDeactivated
from src.domain.policies import UserPolicy
from src.domain.protocols import EventBusProtocol, LoggerProtocol, UserRepository


class DeleteUserHandler:
    """Handler for DeleteUser command.

    The user row is kept with is_active=False so audit logs that reference
    it stay intact.
    """

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

    async def handle(self, cmd: DeleteUser) -> Result[None, ApplicationError]:
        actor_result = await self._enforcer.load_actor(cmd.actor_id)
        if isinstance(actor_result, Failure):
            return actor_result
        actor = actor_result.value

        target_result = await self._enforcer.load_user(cmd.user_id)
        if isinstance(target_result, Failure):
            return target_result
        user = target_result.value

        allowed = self._enforcer.authorize(actor, user, "destroy", UserPolicy)
        if isinstance(allowed, Failure):
            return allowed

        await self._user_repo.delete(user.id)

        await self._event_bus.publish(
            UserDeactivated(user_id=user.id, deactivated_by=actor.id)
        )
        self._logger.info(
            "user_deactivated",
            user_id=str(user.id),
            deactivated_by=str(actor.id),
        )
        return Success(value=None)
