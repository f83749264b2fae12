"""Impersonation resource handlers.

Handler functions for administrator impersonation endpoints.
Routes are registered via ROUTE_REGISTRY in routes/registry.py.

Administrator rights are checked by ImpersonationPolicy inside the
application handlers, always against the administrator: an impersonation
token never grants the impersonated user's (lack of) rights to these routes.

Handlers:
    list_impersonations          - Impersonation audit logs
    create_impersonation         - Start impersonating a user
    delete_current_impersonation - Stop impersonating
"""

from typing import Annotated, Literal
from uuid import UUID

from fastapi import Depends, Query, Request
from fastapi.responses import JSONResponse

from src.application.commands.handlers.start_impersonation_handler import (
    StartImpersonationHandler,
)
from src.application.commands.handlers.stop_impersonation_handler import (
    StopImpersonationHandler,
)
from src.application.commands.impersonation_commands import (
    StartImpersonation,
    StopImpersonation,
)
from src.application.errors import ApplicationError
from src.application.queries.handlers.list_impersonation_audit_logs_handler import (
    ListImpersonationAuditLogsHandler,
)
from src.application.queries.impersonation_queries import ListImpersonationAuditLogs
from src.core.config import settings
from src.core.container import (
    get_list_impersonation_audit_logs_handler,
    get_start_impersonation_handler,
    get_stop_impersonation_handler,
)
from src.core.result import Failure, Success
from src.presentation.routers.api.middleware.auth_dependencies import (
    CurrentUser,
    get_current_user,
    get_policy_actor_id,
    get_token_user,
)
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder
from src.schemas.impersonation_schemas import (
    AuditLogListResponse,
    ImpersonationCreateRequest,
    ImpersonationCreateResponse,
    ImpersonationDeleteResponse,
)


def _error_response(request: Request, error: ApplicationError) -> JSONResponse:
    return ErrorResponseBuilder.from_application_error(
        error=error,
        request=request,
        trace_id=get_trace_id() or "",
    )


async def list_impersonations(
    request: Request,
    status_filter: Annotated[
        Literal["active", "all"],
        Query(alias="status", description="'active' lists running sessions only"),
    ] = "all",
    page: Annotated[int, Query(ge=1, description="Page number (1-indexed)")] = 1,
    actor_id: UUID = Depends(get_policy_actor_id),
    handler: ListImpersonationAuditLogsHandler = Depends(
        get_list_impersonation_audit_logs_handler
    ),
) -> AuditLogListResponse | JSONResponse:
    """List impersonation audit logs, newest first.

    GET /api/v1/admin/impersonations?status=active&page=2 → 200 OK
    """
    result = await handler.handle(
        ListImpersonationAuditLogs(
            actor_id=actor_id,
            active_only=status_filter == "active",
            page=page,
            per_page=settings.audit_logs_per_page,
        )
    )

    match result:
        case Success(value=logs):
            return AuditLogListResponse.from_dto(logs)
        case Failure(error=error):
            return _error_response(request, error)


async def create_impersonation(
    request: Request,
    data: ImpersonationCreateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    handler: StartImpersonationHandler = Depends(get_start_impersonation_handler),
) -> ImpersonationCreateResponse | JSONResponse:
    """Start impersonating a user.

    POST /api/v1/admin/impersonations → 201 Created

    Ends any session already running on the target, and the caller's own
    session when the request is itself impersonated.

    Args:
        request: FastAPI request object.
        data: Target user and reason.
        current_user: Authenticated user (injected).
        handler: StartImpersonation handler (injected).

    Returns:
        ImpersonationCreateResponse with the impersonation token (201 Created).
        JSONResponse with error on failure (400/401/403/404).
    """
    command = StartImpersonation(
        impersonator_id=current_user.policy_actor_id,
        user_id=data.user_id,
        reason=data.reason,
        ip_address=request.client.host if request.client else "",
        user_agent=request.headers.get("user-agent", ""),
        session_id=current_user.token_jti or "",
        current_audit_log_id=current_user.audit_log_id,
    )
    result = await handler.handle(command)

    match result:
        case Success(value=session):
            return ImpersonationCreateResponse.from_dto(session)
        case Failure(error=error):
            return _error_response(request, error)


async def delete_current_impersonation(
    request: Request,
    current_user: CurrentUser = Depends(get_token_user),
    handler: StopImpersonationHandler = Depends(get_stop_impersonation_handler),
) -> ImpersonationDeleteResponse | JSONResponse:
    """Stop impersonating and return to the administrator's own identity.

    DELETE /api/v1/admin/impersonations/current → 200 OK

    Reads the impersonation token without validating the session. The
    administrator token is only issued while the session is still active
    and the request comes from the address it was started from.

    Returns:
        ImpersonationDeleteResponse with a fresh administrator token.
        JSONResponse with error on failure (400 when not impersonating,
        401 when the session already ended or the address changed).
    """
    result = await handler.handle(
        StopImpersonation(
            impersonator_id=current_user.policy_actor_id,
            audit_log_id=current_user.audit_log_id,
            request_ip=request.client.host if request.client else None,
        )
    )

    match result:
        case Success(value=stopped):
            return ImpersonationDeleteResponse.from_dto(stopped)
        case Failure(error=error):
            return _error_response(request, error)
