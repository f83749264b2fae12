"""Impersonation queries (CQRS read operations).

Queries are immutable requests for data. ValidateImpersonationSession is
the one query with a side effect: a failed validation closes the session.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class ValidateImpersonationSession:
    """Check that an impersonation token still describes a live session.

    Attributes:
        audit_log_id: Log named in the token.
        impersonator_id: Administrator named in the token.
        impersonated_user_id: Token subject.
        started_at: Session start from the token.
        ip_address: Address recorded at session start.
        request_ip: Address of the current request.
    """

    audit_log_id: UUID
    impersonator_id: UUID
    impersonated_user_id: UUID
    started_at: datetime
    ip_address: str
    request_ip: str | None


@dataclass(frozen=True, kw_only=True)
class ListImpersonationAuditLogs:
    """List impersonation audit logs, newest first.

    Attributes:
        actor_id: Acting user (must be an administrator).
        active_only: Only sessions that have not ended.
        page: 1-based page number.
        per_page: Page size (default 25).
    """

    actor_id: UUID
    active_only: bool = False
    page: int = 1
    per_page: int = 25
