"""ImpersonationAuditLogRepository protocol.

Port (interface) for hexagonal architecture.
Infrastructure layer implements this protocol.
"""

from typing import Protocol
from uuid import UUID

from src.domain.entities.impersonation_audit_log import ImpersonationAuditLog


class ImpersonationAuditLogRepository(Protocol):
    """Impersonation audit log repository protocol (port).

    Logs are append-mostly: a row is created when a session starts and
    updated exactly once when it ends.
    """

    async def find_by_id(self, log_id: UUID) -> ImpersonationAuditLog | None:
        """Find a log by ID."""
        ...

    async def find_active_for_user(
        self, impersonated_user_id: UUID
    ) -> list[ImpersonationAuditLog]:
        """Return every active (not ended) log impersonating this user."""
        ...

    async def save(self, log: ImpersonationAuditLog) -> None:
        """Persist a new log."""
        ...

    async def update(self, log: ImpersonationAuditLog) -> None:
        """Persist ended_at and metadata changes.

        Raises:
            NoResultFound: If the log doesn't exist.
        """
        ...

    async def list_logs(
        self,
        *,
        active_only: bool = False,
        limit: int = 25,
        offset: int = 0,
    ) -> list[ImpersonationAuditLog]:
        """List logs newest first (by started_at).

        Args:
            active_only: Only logs that have not ended.
            limit: Page size.
            offset: Rows to skip.
        """
        ...

    async def count_logs(self, *, active_only: bool = False) -> int:
        """Count logs matching the same filter as list_logs."""
        ...
