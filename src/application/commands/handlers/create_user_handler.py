"""CreateUser command handler.

Flow:
1. Load actor and authorize UserPolicy.create
2. Check password confirmation
3. Reject duplicate email (CONFLICT)
4. Hash password and save the user
5. Emit UserCreated event
"""

from uuid_extensions import uuid7

from src.application.commands.user_commands import CreateUser
from src.application.dtos import UserResult
from src.application.errors import ApplicationError, ApplicationErrorCode
from src.application.services import PolicyEnforcer, validation_failed
from src.core.result import Failure, Result, Success
from src.domain.entities.user import User
from src.domain.errors import UserError
from src.domain.events.user_events import UserCreated
from src.domain.policies import UserPolicy
from src.domain.protocols import (
    EventBusProtocol,
    LoggerProtocol,
    PasswordHashingProtocol,
    UserRepository,
)


class CreateUserHandler:
    """Handler for CreateUser command."""

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._password_service = password_service
        self._event_bus = event_bus
        self._logger = logger
        self._enforcer = PolicyEnforcer(user_repo)

    async def handle(self, cmd: CreateUser) -> Result[UserResult, ApplicationError]:
        """Handle CreateUser command.

        Returns:
            Success(UserResult): Created user.
            Failure(ApplicationError): UNAUTHORIZED, FORBIDDEN,
            COMMAND_VALIDATION_FAILED or CONFLICT.
        """
        actor_result = await self._enforcer.load_actor(cmd.actor_id)
        if isinstance(actor_result, Failure):
            return actor_result
        actor = actor_result.value

        allowed = self._enforcer.authorize(actor, User, "create", UserPolicy)
        if isinstance(allowed, Failure):
            return allowed

        if (
            cmd.password_confirmation is not None
            and cmd.password_confirmation != cmd.password
        ):
            return validation_failed(
                UserError.PASSWORD_CONFIRMATION_MISMATCH,
                field="password_confirmation",
            )

        if await self._user_repo.exists_by_email(cmd.email):
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.CONFLICT,
                    message=UserError.EMAIL_ALREADY_EXISTS,
                    details={"field": "email"},
                )
            )

        user = User(
            id=uuid7(),
            email=cmd.email,
            password_hash=self._password_service.hash_password(cmd.password),
            first_name=cmd.first_name,
            last_name=cmd.last_name,
            role=cmd.role,
        )
        await self._user_repo.save(user)

        await self._event_bus.publish(
            UserCreated(
                user_id=user.id,
                email=user.email,
                role=user.role.value,
                created_by=actor.id,
            )
        )
        self._logger.info(
            "user_created",
            user_id=str(user.id),
            created_by=str(actor.id),
        )

        return Success(value=UserResult.from_entity(user))
