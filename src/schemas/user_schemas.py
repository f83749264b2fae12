"""User request and response schemas.

Pydantic schemas for the user management endpoints. Includes:
- Request schemas (client → API)
- Response schemas (API → client)
- DTO-to-schema conversion methods

Update requests are deliberately loose: which attributes the caller may
send depends on who the caller is, so the handler validates them after the
policy check and reports problems per field.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.application.dtos import UserListResult, UserResult
from src.domain.enums import UserRole
from src.domain.types import Email, Password
from src.schemas.common_schemas import PaginatedMeta


# =============================================================================
# Response Schemas
# =============================================================================


class UserResponse(BaseModel):
    """Single user response.

    Attributes:
        id: User identifier.
        email: Email address.
        first_name: Given name.
        last_name: Family name.
        full_name: First and last name joined.
        display_name: Full name, falling back to the email.
        initials: Two-letter initials.
        role: Role value.
        role_name: Humanized role.
        is_active: False once deleted.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    id: UUID = Field(..., description="User identifier")
    email: str = Field(..., description="Email address")
    first_name: str | None = Field(None, description="Given name")
    last_name: str | None = Field(None, description="Family name")
    full_name: str | None = Field(None, description="First and last name")
    display_name: str = Field(..., description="Full name or email")
    initials: str = Field(..., description="Initials", examples=["AL"])
    role: str = Field(..., description="Role", examples=["default", "system_admin"])
    role_name: str = Field(..., description="Humanized role", examples=["System admin"])
    is_active: bool = Field(..., description="Whether the account is active")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    @classmethod
    def from_dto(cls, dto: UserResult) -> "UserResponse":
        """Convert application DTO to response schema.

        Args:
            dto: UserResult from handler.

        Returns:
            UserResponse for API response.
        """
        return cls(
            id=dto.id,
            email=dto.email,
            first_name=dto.first_name,
            last_name=dto.last_name,
            full_name=dto.full_name,
            display_name=dto.display_name,
            initials=dto.initials,
            role=dto.role,
            role_name=dto.role_name,
            is_active=dto.is_active,
            created_at=dto.created_at,
            updated_at=dto.updated_at,
        )


class UserListResponse(BaseModel):
    """Page of users visible to the caller."""

    users: list[UserResponse] = Field(..., description="Users on this page")
    meta: PaginatedMeta = Field(..., description="Pagination metadata")

    @classmethod
    def from_dto(cls, dto: UserListResult) -> "UserListResponse":
        return cls(
            users=[UserResponse.from_dto(user) for user in dto.users],
            meta=PaginatedMeta.from_pagination(
                page=dto.page, per_page=dto.per_page, total_count=dto.total_count
            ),
        )


# =============================================================================
# Request Schemas
# =============================================================================


class UserCreateRequest(BaseModel):
    """Request schema for user creation.

    POST /api/v1/users
    Returns: 201 Created
    """

    email: Email
    password: Password
    password_confirmation: str | None = Field(
        None, description="Must match password when given"
    )
    first_name: str | None = Field(None, max_length=100, description="Given name")
    last_name: str | None = Field(None, max_length=100, description="Family name")
    role: UserRole = Field(UserRole.DEFAULT, description="Initial role")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "ada@example.com",
                "password": "s3cret-pass",
                "password_confirmation": "s3cret-pass",
                "first_name": "Ada",
                "last_name": "Lovelace",
                "role": "default",
            }
        }
    )


class UserUpdateRequest(BaseModel):
    """Request schema for a partial user update.

    PATCH /api/v1/users/{user_id}
    Returns: 200 OK

    Only fields present in the body are changed. Sending ``role`` requires
    administrator rights.
    """

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    password: str | None = None
    password_confirmation: str | None = None
    role: str | None = None

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={"example": {"first_name": "Ada", "last_name": "Byron"}},
    )

    def changes(self) -> dict[str, object]:
        """Fields the client actually sent."""
        return self.model_dump(exclude_unset=True)
