"""AuthenticateUser command handler.

Flow:
1. Emit UserLoginAttempted event
2. Find user by email
3. Reject deactivated accounts
4. Verify password
5. Issue access token
6. Emit UserLoginSucceeded event
7. Return Success(AccessTokenResult)

On failure:
- Emit UserLoginFailed event
- Return Failure(ApplicationError) with UNAUTHORIZED

Unknown email and wrong password produce the same message so responses do
not reveal which accounts exist.
"""

from src.application.commands.auth_commands import AuthenticateUser
from src.application.dtos import AccessTokenResult, UserResult
from src.application.errors import ApplicationError, ApplicationErrorCode
from src.core.result import Failure, Result, Success
from src.domain.errors import AuthenticationError
from src.domain.events.user_events import (
    UserLoginAttempted,
    UserLoginFailed,
    UserLoginSucceeded,
)
from src.domain.protocols import (
    EventBusProtocol,
    LoggerProtocol,
    PasswordHashingProtocol,
    TokenGenerationProtocol,
    UserRepository,
)


class AuthenticateUserHandler:
    """Handler for AuthenticateUser command.

    Dependencies (injected via constructor):
        - UserRepository: For user lookup
        - PasswordHashingProtocol: For password verification
        - TokenGenerationProtocol: For the access token
        - EventBusProtocol: For domain events
        - LoggerProtocol: For structured logging
    """

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        token_service: TokenGenerationProtocol,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
        token_expires_in: int,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            user_repo: User repository.
            password_service: Password hashing service.
            token_service: JWT service.
            event_bus: Event bus.
            logger: Logger.
            token_expires_in: Access token lifetime in seconds.
        """
        self._user_repo = user_repo
        self._password_service = password_service
        self._token_service = token_service
        self._event_bus = event_bus
        self._logger = logger
        self._token_expires_in = token_expires_in

    async def handle(
        self, cmd: AuthenticateUser
    ) -> Result[AccessTokenResult, ApplicationError]:
        """Handle AuthenticateUser command.

        Args:
            cmd: AuthenticateUser command (validated).

        Returns:
            Success(AccessTokenResult): Credentials valid.
            Failure(ApplicationError): UNAUTHORIZED.
        """
        await self._event_bus.publish(UserLoginAttempted(email=cmd.email))

        user = await self._user_repo.find_by_email(cmd.email)
        if user is None:
            return await self._fail(
                cmd, "user_not_found", AuthenticationError.INVALID_CREDENTIALS
            )

        if not user.is_active:
            return await self._fail(
                cmd, "account_inactive", AuthenticationError.ACCOUNT_INACTIVE
            )

        if not self._password_service.verify_password(cmd.password, user.password_hash):
            return await self._fail(
                cmd, "invalid_password", AuthenticationError.INVALID_CREDENTIALS
            )

        token = self._token_service.generate_access_token(
            user_id=user.id,
            email=user.email,
            roles=[user.role.value],
        )

        await self._event_bus.publish(
            UserLoginSucceeded(user_id=user.id, email=user.email)
        )
        self._logger.info("user_authenticated", user_id=str(user.id))

        return Success(
            value=AccessTokenResult(
                access_token=token,
                user=UserResult.from_entity(user),
                expires_in=self._token_expires_in,
            )
        )

    async def _fail(
        self, cmd: AuthenticateUser, reason: str, message: str
    ) -> Failure[ApplicationError]:
        await self._event_bus.publish(UserLoginFailed(email=cmd.email, reason=reason))
        return Failure(
            error=ApplicationError(
                code=ApplicationErrorCode.UNAUTHORIZED,
                message=message,
            )
        )
