"""Route metadata types for the API route registry.

The registry (registry.py) lists every v1 route as a RouteMetadata entry;
generator.py turns the entries into FastAPI routes at startup.

Core types:
    RouteMetadata: Complete route specification (method, path, handler, auth, docs)
    HTTPMethod: HTTP method enum (GET, POST, PATCH, PUT, DELETE)
    AuthPolicy / AuthLevel: Which authentication dependency guards the route
    ErrorSpec: Error response specification for OpenAPI

Authorization is not part of the metadata. Record-level permissions are
checked by the policies inside the handlers; the auth level only decides
how the bearer token is read.

Usage:
    from src.presentation.routers.api.v1.routes.metadata import RouteMetadata, HTTPMethod

    metadata = RouteMetadata(
        method=HTTPMethod.GET,
        path="/users/{user_id}",
        handler=get_user,
        resource="users",
        tags=["Users"],
        summary="Get user",
        response_model=UserResponse,
        auth_policy=AuthPolicy(level=AuthLevel.AUTHENTICATED),
    )
"""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel


class HTTPMethod(str, Enum):
    """HTTP methods for API routes."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class AuthLevel(str, Enum):
    """Authentication levels for routes.

    Attributes:
        PUBLIC: No token required (sign-in).
        AUTHENTICATED: Valid token; impersonation sessions are validated.
        TOKEN_ONLY: Valid token, impersonation session not validated. Only
            for ending an impersonation, which must succeed even when the
            session has already been closed.
    """

    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    TOKEN_ONLY = "token_only"


@dataclass(frozen=True, kw_only=True)
class AuthPolicy:
    """Authentication policy for a route.

    Attributes:
        level: Authentication level.
        rationale: Why a route deviates from AUTHENTICATED.

    Examples:
        >>> AuthPolicy(level=AuthLevel.PUBLIC, rationale="Sign-in")
        >>> AuthPolicy(level=AuthLevel.AUTHENTICATED)
    """

    level: AuthLevel
    rationale: str | None = None


@dataclass(frozen=True, kw_only=True)
class ErrorSpec:
    """Error response specification for OpenAPI documentation.

    Attributes:
        status: HTTP status code (e.g., 400, 404, 500)
        description: Human-readable error description
        model: Optional Pydantic model for response (defaults to ProblemDetails)

    Examples:
        >>> ErrorSpec(status=403, description="Not authorized")
        >>> ErrorSpec(status=409, description="Email already registered")
    """

    status: int
    description: str
    model: type[BaseModel] | None = None


@dataclass(frozen=True, kw_only=True)
class RouteMetadata:
    """Complete specification for an API route.

    Identity fields:
        method: HTTP method
        path: Path relative to the version prefix (e.g., "/users/{user_id}")
        handler: Async endpoint function

    Grouping fields:
        resource: Resource category (e.g., "users", "impersonations")
        tags: OpenAPI tags

    OpenAPI documentation:
        summary: Short endpoint description
        description: Detailed endpoint description (markdown supported)
        operation_id: Stable operation ID for client generation

    Request/Response:
        response_model: Pydantic model for success response
        status_code: Success status (200, 201, 204)
        errors: Possible error responses

    Behavior:
        auth_policy: How the bearer token is read

    Deprecation:
        deprecated: Whether endpoint is deprecated
    """

    # Identity
    method: HTTPMethod
    path: str
    handler: Callable[..., Awaitable[Any]]

    # Grouping
    resource: str
    tags: Sequence[str]

    # OpenAPI documentation
    summary: str
    description: str | None = None
    operation_id: str | None = None

    # Request/Response
    response_model: type[BaseModel] | None = None
    status_code: int = 200
    errors: list[ErrorSpec] | None = None

    # Behavior
    auth_policy: AuthPolicy

    # Deprecation
    deprecated: bool = False
