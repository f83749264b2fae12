"""Users resource handlers.

Handler functions for user management endpoints.
Routes are registered via ROUTE_REGISTRY in routes/registry.py.

Every handler acts as the policy actor: the administrator while
impersonating, the token subject otherwise.

Handlers:
    list_users   - List visible users
    create_user  - Create user
    get_user     - Get user
    update_user  - Partially update user
    delete_user  - Deactivate user
    promote_user - Grant the system administrator role
    demote_user  - Revoke the system administrator role
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Path, Query, Request, status
from fastapi.responses import JSONResponse, Response

from src.application.commands.handlers.change_admin_role_handlers import (
    DemoteUserFromAdminHandler,
    PromoteUserToAdminHandler,
)
from src.application.commands.handlers.create_user_handler import CreateUserHandler
from src.application.commands.handlers.delete_user_handler import DeleteUserHandler
from src.application.commands.handlers.update_user_handler import UpdateUserHandler
from src.application.commands.user_commands import (
    CreateUser,
    DeleteUser,
    DemoteUserFromAdmin,
    PromoteUserToAdmin,
    UpdateUser,
)
from src.application.errors import ApplicationError
from src.application.queries.handlers.user_query_handlers import (
    GetUserHandler,
    ListUsersHandler,
)
from src.application.queries.user_queries import GetUser, ListUsers
from src.core.config import settings
from src.core.container import (
    get_create_user_handler,
    get_delete_user_handler,
    get_demote_user_handler,
    get_get_user_handler,
    get_list_users_handler,
    get_promote_user_handler,
    get_update_user_handler,
)
from src.core.result import Failure, Success
from src.domain.enums import UserSort
from src.presentation.routers.api.middleware.auth_dependencies import (
    get_policy_actor_id,
)
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder
from src.schemas.user_schemas import (
    UserCreateRequest,
    UserListResponse,
    UserResponse,
    UserUpdateRequest,
)

UserId = Annotated[UUID, Path(description="User identifier")]


def _error_response(request: Request, error: ApplicationError) -> JSONResponse:
    return ErrorResponseBuilder.from_application_error(
        error=error,
        request=request,
        trace_id=get_trace_id() or "",
    )


async def list_users(
    request: Request,
    search: Annotated[
        str | None,
        Query(max_length=255, description="Match on email, first or last name"),
    ] = None,
    sort: Annotated[UserSort, Query(description="Sort order")] = UserSort.CREATED,
    page: Annotated[int, Query(ge=1, description="Page number (1-indexed)")] = 1,
    per_page: Annotated[
        int, Query(ge=1, le=100, description="Items per page")
    ] = settings.users_per_page,
    actor_id: UUID = Depends(get_policy_actor_id),
    handler: ListUsersHandler = Depends(get_list_users_handler),
) -> UserListResponse | JSONResponse:
    """List users visible to the caller.

    GET /api/v1/users → 200 OK

    Administrators see every active user; anyone else sees only themselves.
    """
    result = await handler.handle(
        ListUsers(
            actor_id=actor_id,
            search=search,
            sort=sort,
            page=page,
            per_page=per_page,
        )
    )

    match result:
        case Success(value=users):
            return UserListResponse.from_dto(users)
        case Failure(error=error):
            return _error_response(request, error)


async def create_user(
    request: Request,
    data: UserCreateRequest,
    actor_id: UUID = Depends(get_policy_actor_id),
    handler: CreateUserHandler = Depends(get_create_user_handler),
) -> UserResponse | JSONResponse:
    """Create a user.

    POST /api/v1/users → 201 Created

    Args:
        request: FastAPI request object.
        data: New user's attributes.
        actor_id: Policy actor (injected).
        handler: CreateUser handler (injected).

    Returns:
        UserResponse on success (201 Created).
        JSONResponse with error on failure (400/403/409).
    """
    command = CreateUser(
        actor_id=actor_id,
        email=data.email,
        password=data.password,
        password_confirmation=data.password_confirmation,
        first_name=data.first_name,
        last_name=data.last_name,
        role=data.role,
    )
    result = await handler.handle(command)

    match result:
        case Success(value=user):
            return UserResponse.from_dto(user)
        case Failure(error=error):
            return _error_response(request, error)


async def get_user(
    request: Request,
    user_id: UserId,
    actor_id: UUID = Depends(get_policy_actor_id),
    handler: GetUserHandler = Depends(get_get_user_handler),
) -> UserResponse | JSONResponse:
    """Get a user.

    GET /api/v1/users/{user_id} → 200 OK
    """
    result = await handler.handle(GetUser(actor_id=actor_id, user_id=user_id))

    match result:
        case Success(value=user):
            return UserResponse.from_dto(user)
        case Failure(error=error):
            return _error_response(request, error)


async def update_user(
    request: Request,
    user_id: UserId,
    data: UserUpdateRequest,
    actor_id: UUID = Depends(get_policy_actor_id),
    handler: UpdateUserHandler = Depends(get_update_user_handler),
) -> UserResponse | JSONResponse:
    """Partially update a user.

    PATCH /api/v1/users/{user_id} → 200 OK

    Only fields present in the body are changed. Sending a field the caller
    may not change (e.g. ``role`` on one's own record) returns 403.
    """
    result = await handler.handle(
        UpdateUser(actor_id=actor_id, user_id=user_id, changes=data.changes())
    )

    match result:
        case Success(value=user):
            return UserResponse.from_dto(user)
        case Failure(error=error):
            return _error_response(request, error)


async def delete_user(
    request: Request,
    user_id: UserId,
    actor_id: UUID = Depends(get_policy_actor_id),
    handler: DeleteUserHandler = Depends(get_delete_user_handler),
) -> Response:
    """Deactivate a user.

    DELETE /api/v1/users/{user_id} → 204 No Content

    The record is kept with ``is_active`` false.
    """
    result = await handler.handle(DeleteUser(actor_id=actor_id, user_id=user_id))

    match result:
        case Failure(error=error):
            return _error_response(request, error)
        case _:
            return Response(status_code=status.HTTP_204_NO_CONTENT)


async def promote_user(
    request: Request,
    user_id: UserId,
    actor_id: UUID = Depends(get_policy_actor_id),
    handler: PromoteUserToAdminHandler = Depends(get_promote_user_handler),
) -> UserResponse | JSONResponse:
    """Grant the system administrator role.

    POST /api/v1/users/{user_id}/admin-role → 200 OK
    """
    result = await handler.handle(PromoteUserToAdmin(actor_id=actor_id, user_id=user_id))

    match result:
        case Success(value=user):
            return UserResponse.from_dto(user)
        case Failure(error=error):
            return _error_response(request, error)


async def demote_user(
    request: Request,
    user_id: UserId,
    actor_id: UUID = Depends(get_policy_actor_id),
    handler: DemoteUserFromAdminHandler = Depends(get_demote_user_handler),
) -> UserResponse | JSONResponse:
    """Revoke the system administrator role.

    DELETE /api/v1/users/{user_id}/admin-role → 200 OK
    """
    result = await handler.handle(
        DemoteUserFromAdmin(actor_id=actor_id, user_id=user_id)
    )

    match result:
        case Success(value=user):
            return UserResponse.from_dto(user)
        case Failure(error=error):
            return _error_response(request, error)
