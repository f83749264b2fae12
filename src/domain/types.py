"""Annotated types with centralized validation (DRY principle).

Define validation once, use everywhere.
All custom types use Pydantic's Annotated with Field constraints and AfterValidator.

Usage:
    from src.domain.types import Email, Password

    class UserCreateRequest(BaseModel):
        email: Email  # Validation included!
        password: Password  # Validation included!
"""

from typing import Annotated

from pydantic import AfterValidator, Field

from src.domain.validators import validate_email, validate_password, validate_role

Email = Annotated[
    str,
    Field(
        min_length=3,
        max_length=255,
        description="Email address",
        examples=["user@example.com"],
    ),
    AfterValidator(validate_email),
]
"""Email address with validation and normalization (lowercase)."""

Password = Annotated[
    str,
    Field(
        min_length=6,
        max_length=128,
        description="Account password",
        examples=["s3cret-pass"],
    ),
    AfterValidator(validate_password),
]
"""Password with length validation (6 to 128 characters)."""

RoleName = Annotated[
    str,
    Field(
        description="User role",
        examples=["default", "system_admin"],
    ),
    AfterValidator(validate_role),
]
"""Role name, one of UserRole values."""

PersonName = Annotated[
    str,
    Field(
        max_length=100,
        description="First or last name",
        examples=["Ada"],
    ),
]
