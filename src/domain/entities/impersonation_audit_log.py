"""Impersonation audit log domain entity.

Every impersonation session is recorded as one log entry. The entry is
created when the session starts and closed (ended_at set) when it stops,
times out or is invalidated. A log with ended_at unset is "active".

Metadata:
    end_impersonation() merges two keys into metadata:
    - end_reason: why the session ended (see ImpersonationEndReason)
    - duration: session length in seconds
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from uuid_extensions import uuid7

from src.core.result import Failure, Result, Success
from src.domain.enums.impersonation_action import (
    ImpersonationAction,
    ImpersonationEndReason,
)
from src.domain.errors.impersonation_error import ImpersonationError


@dataclass
class ImpersonationAuditLog:
    """Audit record of one administrator impersonation session.

    Attributes:
        id: Unique log identifier.
        impersonator_id: Administrator who started the session.
        impersonated_user_id: User being impersonated.
        action: Recorded action (START for every new log).
        reason: Optional free-text reason given by the administrator.
        ip_address: Client address at session start.
        user_agent: Client user agent at session start.
        session_id: Client session identifier at session start.
        started_at: When the session started.
        ended_at: When the session ended (None while active).
        metadata: Arbitrary JSON-compatible details.
        created_at: Row creation timestamp.
    """

    id: UUID
    impersonator_id: UUID
    impersonated_user_id: UUID
    action: ImpersonationAction
    ip_address: str
    user_agent: str
    session_id: str
    started_at: datetime
    reason: str | None = None
    ended_at: datetime | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create_start(
        cls,
        *,
        impersonator_id: UUID,
        impersonated_user_id: UUID,
        ip_address: str | None,
        user_agent: str | None,
        session_id: str | None,
        reason: str | None = None,
        started_at: datetime | None = None,
        action: str = ImpersonationAction.START.value,
    ) -> Result["ImpersonationAuditLog", str]:
        """Build a new active log for a session that is starting.

        Args:
            impersonator_id: Administrator starting the session.
            impersonated_user_id: Target user.
            ip_address: Client address (required).
            user_agent: Client user agent (required).
            session_id: Client session identifier (required).
            reason: Optional reason.
            started_at: Start time, defaults to now (UTC).
            action: Action value, must be a known ImpersonationAction.

        Returns:
            Success(log): New active log.
            Failure(error): A required attribute is blank or the action is unknown.
        """
        if not ip_address:
            return Failure(error=ImpersonationError.IP_ADDRESS_REQUIRED)
        if not user_agent:
            return Failure(error=ImpersonationError.USER_AGENT_REQUIRED)
        if not session_id:
            return Failure(error=ImpersonationError.SESSION_ID_REQUIRED)
        if action not in ImpersonationAction.values():
            return Failure(error=ImpersonationError.INVALID_ACTION)

        now = datetime.now(UTC)
        return Success(
            value=cls(
                id=uuid7(),
                impersonator_id=impersonator_id,
                impersonated_user_id=impersonated_user_id,
                action=ImpersonationAction(action),
                reason=reason,
                ip_address=ip_address,
                user_agent=user_agent,
                session_id=session_id,
                started_at=started_at or now,
                created_at=now,
            )
        )

    def is_active(self) -> bool:
        """A log is active until ended_at is set."""
        return self.ended_at is None

    def duration(self) -> float | None:
        """Session length in seconds, or None while active."""
        if self.ended_at is None:
            return None
        return (self.ended_at - self.started_at).total_seconds()

    def duration_in_words(self) -> str:
        """Human-readable duration.

        Returns:
            str: "Active" while running, "N/A" without a duration, otherwise
            whole seconds, minutes or hours (truncated).

        Example:
            >>> log.duration()
            5400.0
            >>> log.duration_in_words()
            '1 hours'
        """
        if self.is_active():
            return "Active"
        duration = self.duration()
        if duration is None:
            return "N/A"
        if duration < 60:
            return f"{int(duration)} seconds"
        if duration < 3600:
            return f"{int(duration / 60)} minutes"
        return f"{int(duration / 3600)} hours"

    def end_impersonation(
        self,
        reason: str | None = None,
        now: datetime | None = None,
    ) -> bool:
        """Close the session.

        Idempotent: a log that has already ended is left untouched.

        Args:
            reason: End reason, defaults to "manual".
            now: End time, defaults to now (UTC).

        Returns:
            bool: True if the log was ended by this call, False if it had
            already ended.

        Side Effects (when active):
            - Sets ended_at
            - Merges end_reason and duration into metadata
        """
        if self.ended_at is not None:
            return False

        ended_at = now or datetime.now(UTC)
        self.ended_at = ended_at
        self.metadata = {
            **self.metadata,
            "end_reason": reason or ImpersonationEndReason.MANUAL.value,
            "duration": (ended_at - self.started_at).total_seconds(),
        }
        return True

    @property
    def end_reason(self) -> str | None:
        """Reason recorded when the session ended."""
        return self.metadata.get("end_reason")
