"""RFC 9457 Problem Details for HTTP APIs.

Pydantic models for structured error responses.

Exports:
    ErrorDetail: Individual field-specific error
    ProblemDetails: RFC 9457 compliant error response schema
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Individual field-specific error.

    Examples:
        >>> error = ErrorDetail(
        ...     field="password_confirmation",
        ...     code="command_validation_failed",
        ...     message="Password confirmation doesn't match Password",
        ... )
    """

    field: str = Field(..., description="Field name")
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")


class ProblemDetails(BaseModel):
    """RFC 9457 Problem Details for HTTP APIs.

    Attributes:
        type: URI reference identifying the problem type
        title: Short, human-readable summary of the problem type
        status: HTTP status code for this occurrence
        detail: Human-readable explanation specific to this occurrence
        instance: Request path of this occurrence
        errors: Optional field-specific errors (validation failures)
        trace_id: Request trace ID for debugging

    Examples:
        >>> problem = ProblemDetails(
        ...     type="https://allspark.local/errors/forbidden",
        ...     title="Access Denied",
        ...     status=403,
        ...     detail="You are not authorized to perform this action.",
        ...     instance="/api/v1/admin/impersonations",
        ...     trace_id="550e8400-e29b-41d4-a716-446655440000",
        ... )
    """

    type: str = Field(
        ...,
        description="URI reference identifying the problem type",
        examples=["https://allspark.local/errors/forbidden"],
    )
    title: str = Field(..., description="Short, human-readable summary", examples=["Access Denied"])
    status: int = Field(..., description="HTTP status code", examples=[403])
    detail: str = Field(
        ...,
        description="Human-readable explanation",
        examples=["You are not authorized to perform this action."],
    )
    instance: str = Field(
        ...,
        description="URI reference identifying this occurrence",
        examples=["/api/v1/users/0190f2a4-0000-7000-8000-000000000000"],
    )
    errors: list[ErrorDetail] | None = Field(None, description="List of field-specific errors")
    trace_id: str | None = Field(None, description="Request trace ID for debugging")
