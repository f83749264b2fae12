"""User query handlers.

Handles requests to read users through UserPolicy.

Architecture:
- Application layer handlers (orchestrate data retrieval)
- Returns Result[DTO, ApplicationError] (explicit error handling)
- NO domain events (queries are side-effect free)
- ListUsers narrows rows with UserPolicy.Scope before filtering
"""

from src.application.dtos import UserListResult, UserResult
from src.application.errors import ApplicationError
from src.application.queries.user_queries import GetUser, ListUsers
from src.application.services import PolicyEnforcer
from src.core.result import Failure, Result, Success
from src.domain.policies import UserPolicy
from src.domain.protocols import UserRepository


class GetUserHandler:
    """Handler for GetUser query.

    Dependencies (injected via constructor):
        - UserRepository: For actor and user lookup

    Returns:
        Result[UserResult, ApplicationError]: Success(DTO) or Failure(error)
    """

    def __init__(self, user_repo: UserRepository) -> None:
        self._enforcer = PolicyEnforcer(user_repo)

    async def handle(self, query: GetUser) -> Result[UserResult, ApplicationError]:
        actor_result = await self._enforcer.load_actor(query.actor_id)
        if isinstance(actor_result, Failure):
            return actor_result

        user_result = await self._enforcer.load_user(query.user_id)
        if isinstance(user_result, Failure):
            return user_result
        user = user_result.value

        allowed = self._enforcer.authorize(actor_result.value, user, "show", UserPolicy)
        if isinstance(allowed, Failure):
            return allowed

        return Success(value=UserResult.from_entity(user))


class ListUsersHandler:
    """Handler for ListUsers query.

    Non-administrators see only themselves; the scope is resolved before
    search and paging so totals never count hidden rows.
    """

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo
        self._enforcer = PolicyEnforcer(user_repo)

    async def handle(
        self, query: ListUsers
    ) -> Result[UserListResult, ApplicationError]:
        actor_result = await self._enforcer.load_actor(query.actor_id)
        if isinstance(actor_result, Failure):
            return actor_result

        scope = self._enforcer.scope(actor_result.value, UserPolicy)
        search = (query.search or "").strip() or None
        page = max(query.page, 1)

        users = await self._user_repo.list_users(
            scope=scope,
            search=search,
            sort=query.sort,
            limit=query.per_page,
            offset=(page - 1) * query.per_page,
        )
        total = await self._user_repo.count_users(scope=scope, search=search)

        return Success(
            value=UserListResult(
                users=[UserResult.from_entity(user) for user in users],
                total_count=total,
                page=page,
                per_page=query.per_page,
            )
        )
