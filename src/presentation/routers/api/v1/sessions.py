"""Sessions resource handlers.

Handler functions for sign-in and for inspecting the current session.
Routes are registered via ROUTE_REGISTRY in routes/registry.py.

Handlers:
    create_session      - Sign in (POST /sessions)
    get_current_session - Current user and impersonator (GET /sessions/current)
"""

from fastapi import Depends, Request
from fastapi.responses import JSONResponse

from src.application.commands.auth_commands import AuthenticateUser
from src.application.commands.handlers.authenticate_user_handler import (
    AuthenticateUserHandler,
)
from src.application.dtos import UserResult
from src.application.queries.handlers.user_query_handlers import GetUserHandler
from src.application.queries.user_queries import GetUser
from src.core.container import get_authenticate_user_handler, get_get_user_handler
from src.core.result import Failure, Success
from src.presentation.routers.api.middleware.auth_dependencies import (
    CurrentUser,
    get_current_user,
)
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder
from src.schemas.auth_schemas import (
    AccessTokenResponse,
    CurrentSessionResponse,
    SessionCreateRequest,
)


async def create_session(
    request: Request,
    data: SessionCreateRequest,
    handler: AuthenticateUserHandler = Depends(get_authenticate_user_handler),
) -> AccessTokenResponse | JSONResponse:
    """Create a new session (sign in).

    POST /api/v1/sessions → 201 Created

    Args:
        request: FastAPI request object.
        data: Credentials.
        handler: Authentication handler (injected).

    Returns:
        AccessTokenResponse on success (201 Created).
        JSONResponse with error on failure (401).
    """
    result = await handler.handle(
        AuthenticateUser(email=data.email.lower(), password=data.password)
    )

    match result:
        case Success(value=token):
            return AccessTokenResponse.from_dto(token)
        case Failure(error=error):
            return ErrorResponseBuilder.from_application_error(
                error=error,
                request=request,
                trace_id=get_trace_id() or "",
            )


async def get_current_session(
    request: Request,
    current_user: CurrentUser = Depends(get_current_user),
    handler: GetUserHandler = Depends(get_get_user_handler),
) -> CurrentSessionResponse | JSONResponse:
    """Describe the current session.

    GET /api/v1/sessions/current → 200 OK

    While impersonating, ``user`` is the impersonated user and
    ``impersonator`` the administrator behind the request.

    Args:
        request: FastAPI request object.
        current_user: Authenticated user (injected).
        handler: GetUser handler (injected).

    Returns:
        CurrentSessionResponse on success.
        JSONResponse with error on failure (401/404).
    """
    user_result = await handler.handle(
        GetUser(actor_id=current_user.policy_actor_id, user_id=current_user.user_id)
    )
    if isinstance(user_result, Failure):
        return ErrorResponseBuilder.from_application_error(
            error=user_result.error,
            request=request,
            trace_id=get_trace_id() or "",
        )

    impersonator: UserResult | None = None
    if current_user.impersonator_id is not None:
        impersonator_result = await handler.handle(
            GetUser(
                actor_id=current_user.impersonator_id,
                user_id=current_user.impersonator_id,
            )
        )
        match impersonator_result:
            case Success(value=impersonator):
                pass
            case Failure(error=error):
                return ErrorResponseBuilder.from_application_error(
                    error=error,
                    request=request,
                    trace_id=get_trace_id() or "",
                )

    return CurrentSessionResponse.from_dtos(user_result.value, impersonator)
