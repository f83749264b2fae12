"""Impersonation request and response schemas.

RESTful Endpoints:
    GET    /api/v1/admin/impersonations          - List audit logs
    POST   /api/v1/admin/impersonations          - Start impersonating a user
    DELETE /api/v1/admin/impersonations/current  - Stop impersonating
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.application.dtos import (
    AuditLogListResult,
    AuditLogResult,
    ImpersonationSession,
    ImpersonationStopped,
)
from src.schemas.common_schemas import PaginatedMeta
from src.schemas.user_schemas import UserResponse


# =============================================================================
# Audit Logs
# =============================================================================


class AuditLogResponse(BaseModel):
    """Impersonation audit log entry.

    Attributes:
        id: Log identifier.
        impersonator_id: Administrator.
        impersonated_user_id: Impersonated user.
        action: Recorded action ("start" for every new session).
        reason: Reason given when starting.
        ip_address: Client address at start.
        user_agent: Client user agent at start.
        started_at: Session start.
        ended_at: Session end, None while active.
        is_active: Whether the session is still running.
        duration_seconds: Session length, None while active.
        duration_in_words: Humanized duration ("Active" while running).
        end_reason: Why the session ended.
        metadata: Free-form log metadata.
    """

    id: UUID
    impersonator_id: UUID
    impersonated_user_id: UUID
    action: str = Field(..., examples=["start"])
    reason: str | None = None
    ip_address: str
    user_agent: str
    started_at: datetime
    ended_at: datetime | None = None
    is_active: bool
    duration_seconds: float | None = None
    duration_in_words: str = Field(..., examples=["12 minutes", "Active"])
    end_reason: str | None = Field(
        None, examples=["manual", "timeout", "ip_change", "new_session_started"]
    )
    metadata: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_dto(cls, dto: AuditLogResult) -> "AuditLogResponse":
        return cls(
            id=dto.id,
            impersonator_id=dto.impersonator_id,
            impersonated_user_id=dto.impersonated_user_id,
            action=dto.action,
            reason=dto.reason,
            ip_address=dto.ip_address,
            user_agent=dto.user_agent,
            started_at=dto.started_at,
            ended_at=dto.ended_at,
            is_active=dto.is_active,
            duration_seconds=dto.duration_seconds,
            duration_in_words=dto.duration_in_words,
            end_reason=dto.end_reason,
            metadata=dto.metadata,
        )


class AuditLogListResponse(BaseModel):
    """Page of impersonation audit logs, newest first."""

    logs: list[AuditLogResponse] = Field(..., description="Logs on this page")
    meta: PaginatedMeta = Field(..., description="Pagination metadata")

    @classmethod
    def from_dto(cls, dto: AuditLogListResult) -> "AuditLogListResponse":
        return cls(
            logs=[AuditLogResponse.from_dto(log) for log in dto.logs],
            meta=PaginatedMeta.from_pagination(
                page=dto.page, per_page=dto.per_page, total_count=dto.total_count
            ),
        )


# =============================================================================
# Start / Stop
# =============================================================================


class ImpersonationCreateRequest(BaseModel):
    """Request schema for starting an impersonation.

    POST /api/v1/admin/impersonations
    Returns: 201 Created
    """

    user_id: UUID = Field(..., description="User to impersonate")
    reason: str | None = Field(
        None,
        max_length=500,
        description="Why the session is needed (kept in the audit log)",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "user_id": "0190f2a4-5c1e-7d2b-9e8f-1a2b3c4d5e6f",
                "reason": "Reproduce billing page error",
            }
        }
    )


class ImpersonationCreateResponse(BaseModel):
    """Impersonation token and the session it opened.

    Clients replace their own access token with ``access_token`` until the
    session is stopped.
    """

    access_token: str = Field(..., description="Impersonation access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token lifetime in seconds")
    audit_log: AuditLogResponse
    impersonated_user: UserResponse
    impersonator: UserResponse

    @classmethod
    def from_dto(cls, dto: ImpersonationSession) -> "ImpersonationCreateResponse":
        return cls(
            access_token=dto.access_token,
            token_type=dto.token_type,
            expires_in=dto.expires_in,
            audit_log=AuditLogResponse.from_dto(dto.audit_log),
            impersonated_user=UserResponse.from_dto(dto.impersonated_user),
            impersonator=UserResponse.from_dto(dto.impersonator),
        )


class ImpersonationDeleteResponse(BaseModel):
    """Fresh administrator token and the closed session."""

    access_token: str = Field(..., description="Administrator access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token lifetime in seconds")
    audit_log: AuditLogResponse
    impersonator: UserResponse

    @classmethod
    def from_dto(cls, dto: ImpersonationStopped) -> "ImpersonationDeleteResponse":
        return cls(
            access_token=dto.access_token,
            token_type=dto.token_type,
            expires_in=dto.expires_in,
            audit_log=AuditLogResponse.from_dto(dto.audit_log),
            impersonator=UserResponse.from_dto(dto.impersonator),
        )
