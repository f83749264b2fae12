"""Impersonation domain events.

Pattern: 3 events per workflow (ATTEMPTED → SUCCEEDED/FAILED)
- *Attempted: Operation initiated (before business logic)
- *Succeeded: Operation completed successfully
- *Failed: Operation failed (authorization, validation, not found)

Workflows:
    1. Impersonation start
    2. Impersonation stop (manual)

ImpersonationSessionEnded is operational: it is published whenever a
session is closed by the system (new_session_started, timeout, ip_change,
invalid_session).

Handlers:
- LoggingEventHandler: ALL events
"""

from dataclasses import dataclass
from uuid import UUID

from src.domain.events.base_event import DomainEvent


# ═══════════════════════════════════════════════════════════════
# Impersonation Start (Workflow 1)
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True, kw_only=True, slots=True)
class ImpersonationStartAttempted(DomainEvent):
    """Administrator asked to impersonate a user.

    Attributes:
        impersonator_id: Administrator starting the session.
        target_user_id: User to impersonate.
        ip_address: Client address.
    """

    impersonator_id: UUID
    target_user_id: UUID
    ip_address: str | None = None


@dataclass(frozen=True, kw_only=True, slots=True)
class ImpersonationStartSucceeded(DomainEvent):
    """Impersonation session started and recorded.

    Attributes:
        impersonator_id: Administrator who started the session.
        target_user_id: Impersonated user.
        audit_log_id: Audit log recording the session.
        reason: Optional reason given by the administrator.
    """

    impersonator_id: UUID
    target_user_id: UUID
    audit_log_id: UUID
    reason: str | None = None


@dataclass(frozen=True, kw_only=True, slots=True)
class ImpersonationStartFailed(DomainEvent):
    """Impersonation could not start.

    Attributes:
        impersonator_id: Administrator who attempted the session.
        target_user_id: User that was targeted.
        reason: Failure reason (e.g. "user_not_found", "not_authorized").
    """

    impersonator_id: UUID
    target_user_id: UUID
    reason: str


# ═══════════════════════════════════════════════════════════════
# Impersonation Stop (Workflow 2)
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True, kw_only=True, slots=True)
class ImpersonationStopAttempted(DomainEvent):
    """Administrator asked to stop impersonating."""

    impersonator_id: UUID
    audit_log_id: UUID | None = None


@dataclass(frozen=True, kw_only=True, slots=True)
class ImpersonationStopSucceeded(DomainEvent):
    """Impersonation stopped and the audit log closed.

    Attributes:
        impersonator_id: Administrator who stopped the session.
        impersonated_user_id: User that was impersonated.
        audit_log_id: Closed audit log.
        duration_seconds: Session length.
    """

    impersonator_id: UUID
    impersonated_user_id: UUID
    audit_log_id: UUID
    duration_seconds: float | None = None


@dataclass(frozen=True, kw_only=True, slots=True)
class ImpersonationStopFailed(DomainEvent):
    """Stop request failed (nothing to stop, not authorized)."""

    impersonator_id: UUID
    reason: str
    audit_log_id: UUID | None = None


# ═══════════════════════════════════════════════════════════════
# Operational
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True, kw_only=True, slots=True)
class ImpersonationSessionEnded(DomainEvent):
    """A session was closed by the system.

    Attributes:
        audit_log_id: Closed audit log.
        impersonator_id: Administrator of the session.
        impersonated_user_id: Impersonated user.
        end_reason: new_session_started, timeout, ip_change or invalid_session.
    """

    audit_log_id: UUID
    impersonator_id: UUID
    impersonated_user_id: UUID
    end_reason: str
