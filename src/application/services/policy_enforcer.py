"""Policy enforcement service.

Centralizes the steps every guarded handler repeats: load the acting user,
look up the target, run a policy query, and convert failures into
ApplicationError values with the right code.

Architecture:
    - Application service (uses repositories, so not domain)
    - Wraps domain policies (authorize, policy_scope)
    - Returns Result types; never raises for denied access

Usage:
    enforcer = PolicyEnforcer(user_repo)

    match await enforcer.load_actor(cmd.actor_id):
        case Failure() as failure:
            return failure
        case Success(value=actor):
            pass
"""

from typing import Any, TypeVar
from uuid import UUID

from src.application.errors import ApplicationError, ApplicationErrorCode
from src.core.result import Failure, Result, Success
from src.domain.entities.user import User
from src.domain.errors import AuthenticationError, UserError
from src.domain.policies import ApplicationPolicy, ScopeFilter, authorize, policy_scope
from src.domain.protocols.user_repository import UserRepository

R = TypeVar("R")


class PolicyEnforcer:
    """Loads actors and targets and enforces policy queries.

    Dependencies (injected via constructor):
        - UserRepository: For actor and target lookup
    """

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    async def load_actor(self, actor_id: UUID) -> Result[User, ApplicationError]:
        """Load the acting user.

        Returns:
            Success(User): Active user.
            Failure(ApplicationError): UNAUTHORIZED when the user is missing or
            deactivated.
        """
        actor = await self._user_repo.find_by_id(actor_id)
        if actor is None or not actor.is_active:
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.UNAUTHORIZED,
                    message=AuthenticationError.USER_NOT_FOUND,
                    details={"user_id": str(actor_id)},
                )
            )
        return Success(value=actor)

    async def load_user(
        self,
        user_id: UUID,
        message: str = UserError.USER_NOT_FOUND,
    ) -> Result[User, ApplicationError]:
        """Load a target user; deactivated users count as missing.

        Returns:
            Success(User): Active user.
            Failure(ApplicationError): NOT_FOUND.
        """
        user = await self._user_repo.find_by_id(user_id)
        if user is None or not user.is_active:
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.NOT_FOUND,
                    message=message,
                    details={"user_id": str(user_id)},
                )
            )
        return Success(value=user)

    @staticmethod
    def authorize(
        actor: User | None,
        record: R,
        query: str,
        policy_class: type[ApplicationPolicy] | None = None,
    ) -> Result[R, ApplicationError]:
        """Run a policy query, mapping denial to FORBIDDEN."""
        result = authorize(actor, record, query, policy_class)
        if isinstance(result, Failure):
            authz_error = result.error
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.FORBIDDEN,
                    message=authz_error.message,
                    domain_error=authz_error,
                    details={
                        "required_permission": authz_error.required_permission
                        or query
                    },
                )
            )
        return Success(value=result.value)

    @staticmethod
    def scope(
        actor: User | None,
        policy_class: type[ApplicationPolicy] = ApplicationPolicy,
    ) -> ScopeFilter:
        return policy_scope(actor, policy_class)


def validation_failed(message: str, **details: Any) -> Failure[ApplicationError]:
    """Build a COMMAND_VALIDATION_FAILED failure."""
    return Failure(
        error=ApplicationError(
            code=ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
            message=message,
            details={key: str(value) for key, value in details.items()} or None,
        )
    )
