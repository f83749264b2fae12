"""Impersonation commands (CQRS write operations).

Pattern:
- Commands are data containers (no logic)
- Handlers execute business logic
- Handlers return Result types
"""

from dataclasses import dataclass
from uuid import UUID

from src.domain.enums.impersonation_action import ImpersonationEndReason


@dataclass(frozen=True, kw_only=True)
class StartImpersonation:
    """Administrator starts acting as another user.

    Attributes:
        impersonator_id: Authenticated administrator (never the impersonated
            user, even when the request itself is impersonated).
        user_id: User to impersonate.
        reason: Optional reason recorded in the audit log.
        ip_address: Client address.
        user_agent: Client user agent.
        session_id: Client session identifier.
        current_audit_log_id: Session the administrator is already running,
            if any. It is ended before the new one starts.

    Example:
        >>> command = StartImpersonation(
        ...     impersonator_id=admin.id,
        ...     user_id=user.id,
        ...     reason="Reproduce billing issue",
        ...     ip_address="203.0.113.7",
        ...     user_agent="Mozilla/5.0",
        ...     session_id="0190f2a4-...",
        ... )
    """

    impersonator_id: UUID
    user_id: UUID
    ip_address: str
    user_agent: str
    session_id: str
    reason: str | None = None
    current_audit_log_id: UUID | None = None


@dataclass(frozen=True, kw_only=True)
class StopImpersonation:
    """Administrator stops the current impersonation.

    Attributes:
        impersonator_id: Administrator named in the impersonation token.
        audit_log_id: Log from the token; None when the request is not
            impersonated.
        request_ip: Address the stop request came from. Must match the
            address the session was started from.
        reason: End reason (default "manual").
    """

    impersonator_id: UUID
    audit_log_id: UUID | None
    reason: str = ImpersonationEndReason.MANUAL.value
    request_ip: str | None = None


@dataclass(frozen=True, kw_only=True)
class EndImpersonationSession:
    """Close a session for a system-detected reason.

    Attributes:
        audit_log_id: Log to close.
        reason: timeout, ip_change, invalid_session or new_session_started.
    """

    audit_log_id: UUID
    reason: ImpersonationEndReason
