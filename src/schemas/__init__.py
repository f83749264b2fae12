"""Request/response schemas for API endpoints.

All Pydantic models for HTTP request validation and response serialization.
Schemas are kept separate from domain entities (HTTP-layer concerns only).

Usage:
    from src.schemas import UserCreateRequest, UserResponse
"""

from src.schemas.auth_schemas import (
    AccessTokenResponse,
    CurrentSessionResponse,
    SessionCreateRequest,
)
from src.schemas.common_schemas import PaginatedMeta
from src.schemas.impersonation_schemas import (
    AuditLogListResponse,
    AuditLogResponse,
    ImpersonationCreateRequest,
    ImpersonationCreateResponse,
    ImpersonationDeleteResponse,
)
from src.schemas.user_schemas import (
    UserCreateRequest,
    UserListResponse,
    UserResponse,
    UserUpdateRequest,
)

__all__ = [
    # Sessions
    "AccessTokenResponse",
    "CurrentSessionResponse",
    "SessionCreateRequest",
    # Common
    "PaginatedMeta",
    # Impersonation
    "AuditLogListResponse",
    "AuditLogResponse",
    "ImpersonationCreateRequest",
    "ImpersonationCreateResponse",
    "ImpersonationDeleteResponse",
    # Users
    "UserCreateRequest",
    "UserListResponse",
    "UserResponse",
    "UserUpdateRequest",
]
