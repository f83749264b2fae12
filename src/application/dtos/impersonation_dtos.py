"""Impersonation DTOs."""

from dataclasses import dataclass
from datetime import datetime
from math import ceil
from typing import Any
from uuid import UUID

from src.application.dtos.user_dtos import UserResult
from src.domain.entities.impersonation_audit_log import ImpersonationAuditLog


@dataclass(frozen=True, kw_only=True)
class AuditLogResult:
    """Read model of an impersonation audit log."""

    id: UUID
    impersonator_id: UUID
    impersonated_user_id: UUID
    action: str
    reason: str | None
    ip_address: str
    user_agent: str
    started_at: datetime
    ended_at: datetime | None
    is_active: bool
    duration_seconds: float | None
    duration_in_words: str
    end_reason: str | None
    metadata: dict[str, Any]

    @classmethod
    def from_entity(cls, log: ImpersonationAuditLog) -> "AuditLogResult":
        return cls(
            id=log.id,
            impersonator_id=log.impersonator_id,
            impersonated_user_id=log.impersonated_user_id,
            action=log.action.value,
            reason=log.reason,
            ip_address=log.ip_address,
            user_agent=log.user_agent,
            started_at=log.started_at,
            ended_at=log.ended_at,
            is_active=log.is_active(),
            duration_seconds=log.duration(),
            duration_in_words=log.duration_in_words(),
            end_reason=log.end_reason,
            metadata=dict(log.metadata),
        )


@dataclass(frozen=True, kw_only=True)
class AuditLogListResult:
    """One page of audit logs, newest first."""

    logs: list[AuditLogResult]
    total_count: int
    page: int
    per_page: int

    @property
    def total_pages(self) -> int:
        return ceil(self.total_count / self.per_page) if self.per_page else 0


@dataclass(frozen=True, kw_only=True)
class ImpersonationSession:
    """Result of starting an impersonation.

    Attributes:
        access_token: Token for the impersonated user carrying the
            impersonation claims. Clients use it in place of their own token.
        expires_in: Token lifetime in seconds.
        audit_log: Log recording the session.
        impersonated_user: The user being impersonated.
        impersonator: The administrator.
    """

    access_token: str
    expires_in: int
    audit_log: AuditLogResult
    impersonated_user: UserResult
    impersonator: UserResult
    token_type: str = "bearer"


@dataclass(frozen=True, kw_only=True)
class ImpersonationStopped:
    """Result of stopping an impersonation.

    Attributes:
        access_token: Fresh token for the administrator.
        expires_in: Token lifetime in seconds.
        audit_log: The closed log.
        impersonator: The administrator, now acting as themselves again.
    """

    access_token: str
    expires_in: int
    audit_log: AuditLogResult
    impersonator: UserResult
    token_type: str = "bearer"
