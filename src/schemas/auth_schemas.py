"""Authentication request/response schemas.

Pydantic models for API request validation and response serialization.
Kept separate from domain entities - these are HTTP-layer concerns.

RESTful Endpoints:
    POST   /api/v1/sessions          - Create session (sign in)
    GET    /api/v1/sessions/current  - Current user and impersonator
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.application.dtos import AccessTokenResult, UserResult
from src.schemas.user_schemas import UserResponse


class SessionCreateRequest(BaseModel):
    """Request schema for session creation (sign in).

    POST /api/v1/sessions
    Returns: 201 Created
    """

    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["user@example.com"],
    )
    password: str = Field(
        ...,
        min_length=1,
        description="User's password",
        examples=["s3cret-pass"],
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "password": "s3cret-pass",
            }
        }
    )


class AccessTokenResponse(BaseModel):
    """Access token with its subject.

    Returned by sign-in and by stopping an impersonation.
    """

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: UserResponse = Field(..., description="Token subject")

    @classmethod
    def from_dto(cls, dto: AccessTokenResult) -> "AccessTokenResponse":
        return cls(
            access_token=dto.access_token,
            token_type=dto.token_type,
            expires_in=dto.expires_in,
            user=UserResponse.from_dto(dto.user),
        )


class CurrentSessionResponse(BaseModel):
    """Who the caller is acting as, and who they really are.

    GET /api/v1/sessions/current
    Returns: 200 OK
    """

    user: UserResponse = Field(..., description="User the token acts as")
    impersonator: UserResponse | None = Field(
        None,
        description="Administrator behind the request while impersonating",
    )
    is_impersonating: bool = Field(..., description="Whether this is an impersonation token")

    @classmethod
    def from_dtos(
        cls, user: UserResult, impersonator: UserResult | None
    ) -> "CurrentSessionResponse":
        return cls(
            user=UserResponse.from_dto(user),
            impersonator=UserResponse.from_dto(impersonator) if impersonator else None,
            is_impersonating=impersonator is not None,
        )
