"""Impersonation audit log database model.

One row per impersonation session. Rows are never deleted; ending a session
sets ended_at and merges end_reason/duration into metadata.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import JSON, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel


class ImpersonationAuditLog(BaseMutableModel):
    """Impersonation audit log model.

    Fields:
        impersonator_id: Administrator (FK users.id)
        impersonated_user_id: Target user (FK users.id)
        action: start, end, timeout or forced_end
        reason: Optional reason given by the administrator
        ip_address / user_agent / session_id: Client at session start
        started_at / ended_at: Session bounds (ended_at null while active)
        metadata_: JSON details (column name "metadata")

    Indexes:
        - (impersonated_user_id, ended_at) for the active-session lookup
        - started_at for the newest-first listing
    """

    __tablename__ = "impersonation_audit_logs"
    __table_args__ = (
        Index(
            "idx_impersonation_logs_target_active",
            "impersonated_user_id",
            "ended_at",
        ),
        Index("idx_impersonation_logs_impersonator", "impersonator_id"),
    )

    impersonator_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id"), nullable=False
    )
    impersonated_user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id"), nullable=False
    )
    action: Mapped[str] = mapped_column(String(20), nullable=False)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    ip_address: Mapped[str] = mapped_column(String(45), nullable=False)
    user_agent: Mapped[str] = mapped_column(Text, nullable=False)
    session_id: Mapped[str] = mapped_column(String(255), nullable=False)
    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    ended_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    metadata_: Mapped[dict[str, Any]] = mapped_column(
        "metadata", JSON, nullable=False, default=dict
    )
