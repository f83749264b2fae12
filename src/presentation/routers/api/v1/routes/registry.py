"""API route registry - the list of every v1 route.

ROUTE_REGISTRY is turned into FastAPI routes by
register_routes_from_registry() when the v1 router is built.

Registry structure:
    - 12 endpoints across 3 resources (sessions, users, impersonations)
    - Each entry is a RouteMetadata instance with complete specification
    - Handlers reference functions from the resource modules
    - Paths are relative to the /api/v1 prefix

Usage:
    from src.presentation.routers.api.v1.routes.registry import ROUTE_REGISTRY
    from src.presentation.routers.api.v1.routes.generator import register_routes_from_registry

    router = APIRouter(prefix="/api/v1")
    register_routes_from_registry(router, ROUTE_REGISTRY)
"""

from src.presentation.routers.api.v1.admin.impersonations import (
    create_impersonation,
    delete_current_impersonation,
    list_impersonations,
)
from src.presentation.routers.api.v1.routes.metadata import (
    AuthLevel,
    AuthPolicy,
    ErrorSpec,
    HTTPMethod,
    RouteMetadata,
)
from src.presentation.routers.api.v1.sessions import (
    create_session,
    get_current_session,
)
from src.presentation.routers.api.v1.users import (
    create_user,
    delete_user,
    demote_user,
    get_user,
    list_users,
    promote_user,
    update_user,
)
from src.schemas.auth_schemas import AccessTokenResponse, CurrentSessionResponse
from src.schemas.impersonation_schemas import (
    AuditLogListResponse,
    ImpersonationCreateResponse,
    ImpersonationDeleteResponse,
)
from src.schemas.user_schemas import UserListResponse, UserResponse

AUTHENTICATED = AuthPolicy(level=AuthLevel.AUTHENTICATED)

UNAUTHORIZED = ErrorSpec(status=401, description="Missing or invalid token")
FORBIDDEN = ErrorSpec(status=403, description="Not authorized")
USER_NOT_FOUND = ErrorSpec(status=404, description="User not found")

ROUTE_REGISTRY: list[RouteMetadata] = [
    # =========================================================================
    # Sessions
    # =========================================================================
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/sessions",
        handler=create_session,
        resource="sessions",
        tags=["Sessions"],
        summary="Create session",
        description="Sign in with email and password and receive an access token.",
        operation_id="create_session",
        response_model=AccessTokenResponse,
        status_code=201,
        errors=[ErrorSpec(status=401, description="Invalid credentials")],
        auth_policy=AuthPolicy(level=AuthLevel.PUBLIC, rationale="Sign-in"),
    ),
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/sessions/current",
        handler=get_current_session,
        resource="sessions",
        tags=["Sessions"],
        summary="Get current session",
        description=(
            "The user the token acts as and, while impersonating, the "
            "administrator behind the request."
        ),
        operation_id="get_current_session",
        response_model=CurrentSessionResponse,
        errors=[UNAUTHORIZED],
        auth_policy=AUTHENTICATED,
    ),
    # =========================================================================
    # Users
    # =========================================================================
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/users",
        handler=list_users,
        resource="users",
        tags=["Users"],
        summary="List users",
        description="Users visible to the caller. Administrators see everyone.",
        operation_id="list_users",
        response_model=UserListResponse,
        errors=[UNAUTHORIZED],
        auth_policy=AUTHENTICATED,
    ),
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/users",
        handler=create_user,
        resource="users",
        tags=["Users"],
        summary="Create user",
        operation_id="create_user",
        response_model=UserResponse,
        status_code=201,
        errors=[
            ErrorSpec(status=400, description="Validation error"),
            UNAUTHORIZED,
            FORBIDDEN,
            ErrorSpec(status=409, description="Email already registered"),
        ],
        auth_policy=AUTHENTICATED,
    ),
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/users/{user_id}",
        handler=get_user,
        resource="users",
        tags=["Users"],
        summary="Get user",
        operation_id="get_user",
        response_model=UserResponse,
        errors=[UNAUTHORIZED, FORBIDDEN, USER_NOT_FOUND],
        auth_policy=AUTHENTICATED,
    ),
    RouteMetadata(
        method=HTTPMethod.PATCH,
        path="/users/{user_id}",
        handler=update_user,
        resource="users",
        tags=["Users"],
        summary="Update user",
        description="Partial update. Only attributes the caller may change are accepted.",
        operation_id="update_user",
        response_model=UserResponse,
        errors=[
            ErrorSpec(status=400, description="Validation error"),
            UNAUTHORIZED,
            ErrorSpec(status=403, description="Not authorized or attribute not permitted"),
            USER_NOT_FOUND,
            ErrorSpec(status=409, description="Email already registered"),
        ],
        auth_policy=AUTHENTICATED,
    ),
    RouteMetadata(
        method=HTTPMethod.DELETE,
        path="/users/{user_id}",
        handler=delete_user,
        resource="users",
        tags=["Users"],
        summary="Delete user",
        description="Deactivates the account.",
        operation_id="delete_user",
        status_code=204,
        errors=[UNAUTHORIZED, FORBIDDEN, USER_NOT_FOUND],
        auth_policy=AUTHENTICATED,
    ),
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/users/{user_id}/admin-role",
        handler=promote_user,
        resource="users",
        tags=["Users"],
        summary="Promote user to administrator",
        operation_id="promote_user",
        response_model=UserResponse,
        errors=[UNAUTHORIZED, FORBIDDEN, USER_NOT_FOUND],
        auth_policy=AUTHENTICATED,
    ),
    RouteMetadata(
        method=HTTPMethod.DELETE,
        path="/users/{user_id}/admin-role",
        handler=demote_user,
        resource="users",
        tags=["Users"],
        summary="Demote administrator",
        operation_id="demote_user",
        response_model=UserResponse,
        errors=[UNAUTHORIZED, FORBIDDEN, USER_NOT_FOUND],
        auth_policy=AUTHENTICATED,
    ),
    # =========================================================================
    # Impersonations (admin)
    # =========================================================================
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/admin/impersonations",
        handler=list_impersonations,
        resource="impersonations",
        tags=["Admin"],
        summary="List impersonation audit logs",
        description="Newest first. `status=active` lists running sessions only.",
        operation_id="list_impersonations",
        response_model=AuditLogListResponse,
        errors=[UNAUTHORIZED, FORBIDDEN],
        auth_policy=AUTHENTICATED,
    ),
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/admin/impersonations",
        handler=create_impersonation,
        resource="impersonations",
        tags=["Admin"],
        summary="Start impersonation",
        description=(
            "Returns an access token for the target user. Requests made with "
            "it are checked against the audit log and end after 4 hours or "
            "on an IP address change."
        ),
        operation_id="create_impersonation",
        response_model=ImpersonationCreateResponse,
        status_code=201,
        errors=[
            ErrorSpec(status=400, description="Invalid request"),
            UNAUTHORIZED,
            ErrorSpec(status=403, description="Cannot impersonate this user"),
            USER_NOT_FOUND,
        ],
        auth_policy=AUTHENTICATED,
    ),
    RouteMetadata(
        method=HTTPMethod.DELETE,
        path="/admin/impersonations/current",
        handler=delete_current_impersonation,
        resource="impersonations",
        tags=["Admin"],
        summary="Stop impersonation",
        description="Ends the session and returns a fresh administrator token.",
        operation_id="delete_current_impersonation",
        response_model=ImpersonationDeleteResponse,
        errors=[
            ErrorSpec(status=400, description="Not impersonating"),
            UNAUTHORIZED,
            FORBIDDEN,
        ],
        auth_policy=AuthPolicy(
            level=AuthLevel.TOKEN_ONLY,
            rationale="The handler reports an ended session itself",
        ),
    ),
]
